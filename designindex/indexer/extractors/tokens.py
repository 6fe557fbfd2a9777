"""Token Extractor.

Reads the tokens package (``properties/<category>/*.json``) and generates the
magic-unit spacing scale. Each category has its own reader; all of them emit
Token records with deterministic CSS/SCSS variable names.
"""

import json
import re

from designindex.utils.logging import logger

from ..config import MAGIC_UNIT_PX, SHADOW_FIELDS, SPACING_SCALE, SPACING_SOURCE_FILE
from ..core import join, list_files, relative_posix
from ..models import Token, TokenProperty
from . import BaseExtractor
from .values import format_number, leading_number, parse_value

SUBCATEGORY_SUFFIX = re.compile(r"-\d+$")


def css_variable(category: str, path: str) -> str:
    return f"--{category}-{path.replace('.', '-').lower()}"


def scss_variable(category: str, path: str) -> str:
    return f"${category}-{path.replace('.', '-').lower()}"


def is_value_leaf(node) -> bool:
    """A leaf is an object carrying a string ``value`` field."""
    return isinstance(node, dict) and isinstance(node.get("value"), str)


def color_subcategory(path: str) -> str | None:
    """``primary-01.100`` -> ``primary``. Single-segment paths have none."""
    parts = path.split(".")
    if len(parts) < 2:
        return None
    return SUBCATEGORY_SUFFIX.sub("", parts[0])


def spacing_token(name: str, multiplier: float) -> Token:
    """One step of the magic-unit scale (1mu = 16px)."""
    px = multiplier * MAGIC_UNIT_PX
    return Token(
        category="spacing",
        subcategory="magic-unit",
        name=name,
        path=f"spacing.{name}",
        css_variable=f"--spacing-{name}",
        scss_variable=f"${name}",
        value_raw=f"{format_number(multiplier)}rem",
        value_number=float(multiplier),
        value_unit="rem",
        value_computed=f"{format_number(px)}px",
        description=f"{format_number(multiplier)} × magic-unit ({format_number(px)}px)",
        source_file=SPACING_SOURCE_FILE,
    )


def magic_unit_token() -> Token:
    return Token(
        category="spacing",
        subcategory="base",
        name="magic-unit",
        path="spacing.magic-unit",
        css_variable="--spacing-magic-unit",
        scss_variable="$magic-unit",
        value_raw=f"{MAGIC_UNIT_PX}px",
        value_number=float(MAGIC_UNIT_PX),
        value_unit="px",
        value_computed=f"{MAGIC_UNIT_PX}px",
        description="Base magic unit value",
        source_file=SPACING_SOURCE_FILE,
    )


class TokenExtractor(BaseExtractor):
    """Extractor for the design tokens package.

    Options:
        styles_dir: styles package root, checked for the magic-unit source
    """

    category = "tokens"

    def extract(self) -> list[Token]:
        tokens: list[Token] = []
        readers = (
            self.extract_colors,
            self.extract_spacing,
            self.extract_shadows,
            self.extract_borders,
            self.extract_radii,
            self.extract_screens,
            self.extract_typography,
            self.extract_grid,
        )
        for reader in readers:
            batch = reader()
            logger.debug(f"{reader.__name__}: {len(batch)} tokens")
            tokens.extend(batch)

        return self._dedupe(tokens)

    @staticmethod
    def _dedupe(tokens: list[Token]) -> list[Token]:
        """First occurrence of a path wins."""
        seen: set[str] = set()
        unique = []
        for token in tokens:
            if token.path in seen:
                logger.warning(f"Duplicate token path {token.path} in {token.source_file}, skipped")
                continue
            seen.add(token.path)
            unique.append(token)
        return unique

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _properties_dir(self, *parts: str) -> str:
        return join(self.source, self.root, "properties", *parts)

    def _load_json(self, path: str) -> dict | None:
        text = self.read_text(path)
        if text is None:
            return None
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Could not parse {path}: {e}")
            return None
        if not isinstance(data, dict):
            logger.warning(f"Expected a JSON object in {path}, skipped")
            return None
        return data

    @staticmethod
    def _section(data: dict, keys: tuple[str, ...], source_file: str, optional: bool = False) -> dict:
        """Walk ``keys`` down nested objects.

        A missing key yields ``data`` itself unless ``optional``, in which case
        it yields an empty object. Anything that is not an object is logged and
        treated as empty, so one malformed entry never stops the reader.
        """
        node = data
        for key in keys:
            if key not in node:
                if optional:
                    return {}
                continue
            node = node[key]
            if not isinstance(node, dict):
                logger.warning(f"Expected an object under '{key}' in {source_file}, skipped")
                return {}
        return node

    def _json_files(self, *parts: str, recursive: bool = False) -> list[str]:
        directory = self._properties_dir(*parts)
        if not self.source.is_dir(directory):
            logger.debug(f"Token directory not found: {directory}")
            return []
        if recursive:
            return list(list_files(directory, lambda name: name.endswith(".json"), self.source))
        return [
            join(self.source, directory, name)
            for name in self.source.list_dir(directory)
            if name.endswith(".json") and not self.source.is_dir(join(self.source, directory, name))
        ]

    def _relative(self, path: str) -> str:
        return relative_posix(path, self.root)

    # ------------------------------------------------------------------
    # colors
    # ------------------------------------------------------------------

    def extract_colors(self) -> list[Token]:
        tokens = []
        for file_path in self._json_files("color", recursive=True):
            data = self._load_json(file_path)
            if data is None:
                continue
            source_file = self._relative(file_path)
            colors = self._section(data, ("color",), source_file)
            tokens.extend(self._flatten_colors(colors, source_file))
        return tokens

    def _flatten_colors(self, node: dict, source_file: str, prefix: str = "") -> list[Token]:
        tokens = []
        for key, value in node.items():
            path = f"{prefix}.{key}" if prefix else key

            if is_value_leaf(value):
                parsed = parse_value(value["value"])
                tokens.append(Token(
                    category="color",
                    subcategory=color_subcategory(path),
                    name=path.replace(".", "-"),
                    path=f"color.{path}",
                    css_variable=css_variable("color", path),
                    scss_variable=scss_variable("color", path),
                    value_raw=parsed.raw,
                    value_number=parsed.number,
                    value_unit=parsed.unit,
                    description=value.get("description"),
                    source_file=source_file,
                ))
            elif isinstance(value, dict):
                tokens.extend(self._flatten_colors(value, source_file, path))
        return tokens

    # ------------------------------------------------------------------
    # spacing (generated)
    # ------------------------------------------------------------------

    def extract_spacing(self) -> list[Token]:
        styles_dir = self.options.get("styles_dir")
        if styles_dir:
            scss_path = join(self.source, styles_dir, SPACING_SOURCE_FILE)
            if not self.source.exists(scss_path):
                logger.warning(f"Magic unit SCSS not found: {scss_path}, using predefined scale")

        tokens = [spacing_token(name, multiplier) for name, multiplier in SPACING_SCALE]
        tokens.append(magic_unit_token())
        return tokens

    # ------------------------------------------------------------------
    # shadows
    # ------------------------------------------------------------------

    def extract_shadows(self) -> list[Token]:
        tokens = []
        for file_path in self._json_files("shadow"):
            data = self._load_json(file_path)
            if data is None:
                continue
            source_file = self._relative(file_path)

            for size_name, definition in self._section(data, ("shadow",), source_file).items():
                if not isinstance(definition, dict) or "x" not in definition:
                    continue
                try:
                    values = {field: str(definition[field]["value"]) for field in SHADOW_FIELDS}
                except (KeyError, TypeError) as e:
                    logger.warning(f"Shadow {size_name} in {source_file} is incomplete ({e}), skipped")
                    continue

                properties = []
                for field in SHADOW_FIELDS:
                    parsed = parse_value(values[field])
                    properties.append(TokenProperty(
                        property=field,
                        value=values[field],
                        value_number=parsed.number,
                        value_unit=parsed.unit,
                    ))

                tokens.append(Token(
                    category="shadow",
                    name=size_name,
                    path=f"shadow.{size_name}",
                    css_variable=f"--shadow-{size_name}",
                    scss_variable=f"$shadow-{size_name}",
                    value_raw=" ".join(values[f] for f in ("x", "y", "blur", "spread")),
                    description=f"Shadow size {size_name}",
                    source_file=source_file,
                    properties=properties,
                ))
        return tokens

    # ------------------------------------------------------------------
    # borders & radii
    # ------------------------------------------------------------------

    def extract_borders(self) -> list[Token]:
        return self._pixel_tokens("border", subcategory="width", label="Border width")

    def extract_radii(self) -> list[Token]:
        return self._pixel_tokens("radius", subcategory=None, label="Border radius")

    def _pixel_tokens(self, category: str, subcategory: str | None, label: str) -> list[Token]:
        tokens = []
        for file_path in self._json_files(category):
            data = self._load_json(file_path)
            if data is None:
                continue
            source_file = self._relative(file_path)

            for size_name, definition in self._section(data, (category,), source_file).items():
                if not isinstance(definition, dict) or "value" not in definition:
                    continue
                value = definition["value"]
                number = leading_number(value)
                if number is None:
                    logger.warning(f"{category} {size_name} in {source_file} has no numeric value, skipped")
                    continue

                tokens.append(Token(
                    category=category,
                    subcategory=subcategory,
                    name=size_name,
                    path=f"{category}.{size_name}",
                    css_variable=f"--{category}-{size_name}",
                    scss_variable=f"${category}-{size_name}",
                    value_raw=str(value),
                    value_number=number,
                    value_unit="px",
                    value_computed=f"{format_number(number)}px",
                    description=definition.get("description") or f"{label} {size_name}",
                    source_file=source_file,
                ))
        return tokens

    # ------------------------------------------------------------------
    # size package: screens, typography, grid
    # ------------------------------------------------------------------

    def _size_file(self, name: str) -> tuple[dict | None, str]:
        path = self._properties_dir("size", name)
        source_file = f"properties/size/{name}"
        if not self.source.exists(path):
            logger.debug(f"Size token file not found: {path}")
            return None, source_file
        return self._load_json(path), source_file

    def extract_screens(self) -> list[Token]:
        data, source_file = self._size_file("screens.json")
        if data is None:
            return []

        tokens = []
        for screen_name, definition in self._section(data, ("screen",), source_file).items():
            if not isinstance(definition, dict) or "value" not in definition:
                continue
            value = definition["value"]
            parsed = parse_value(value)
            subcategory = screen_name.split("-")[0] if "-" in screen_name else "breakpoint"

            tokens.append(Token(
                category="screen",
                subcategory=subcategory,
                name=screen_name,
                path=f"screen.{screen_name}",
                css_variable=f"--screen-{screen_name}",
                scss_variable=f"$screen-{screen_name}",
                value_raw=parsed.raw,
                value_number=parsed.number,
                value_unit=parsed.unit or "px",
                value_computed=parsed.raw,
                description=definition.get("comment") or f"Screen breakpoint {screen_name}",
                source_file=source_file,
            ))
        return tokens

    def extract_typography(self) -> list[Token]:
        data, source_file = self._size_file("font.json")
        if data is None:
            return []

        tokens = []

        fonts = self._section(data, ("size", "font"), source_file, optional=True)
        for size_name, definition in fonts.items():
            token = self._rem_token(
                definition,
                subcategory="font-size",
                name=f"font-{size_name}",
                path=f"typography.font.{size_name}",
                variable=f"font-size-{size_name}",
                fallback_description=f"Font size {size_name}",
                source_file=source_file,
            )
            if token:
                tokens.append(token)

        lines = self._section(data, ("size", "line"), source_file, optional=True)
        for size_name, variants in lines.items():
            if not isinstance(variants, dict):
                continue
            for variant, definition in variants.items():
                token = self._rem_token(
                    definition,
                    subcategory="line-height",
                    name=f"line-{size_name}-{variant}",
                    path=f"typography.line.{size_name}.{variant}",
                    variable=f"line-height-{size_name}-{variant}",
                    fallback_description=f"Line height {size_name} {variant}",
                    source_file=source_file,
                )
                if token:
                    tokens.append(token)
        return tokens

    def _rem_token(self, definition, *, subcategory: str, name: str, path: str, variable: str,
                   fallback_description: str, source_file: str) -> Token | None:
        if not isinstance(definition, dict) or "value" not in definition:
            return None
        value = definition["value"]
        number = leading_number(value)
        if number is None:
            logger.warning(f"Typography token {path} has no numeric value, skipped")
            return None

        return Token(
            category="typography",
            subcategory=subcategory,
            name=name,
            path=path,
            css_variable=f"--{variable}",
            scss_variable=f"${variable}",
            value_raw=str(value),
            value_number=number,
            value_unit="rem",
            value_computed=f"{round(number * MAGIC_UNIT_PX)}px",
            description=definition.get("comment") or fallback_description,
            source_file=source_file,
        )

    def extract_grid(self) -> list[Token]:
        tokens = []

        data, source_file = self._size_file("grid.json")
        if data is not None:
            gutters = self._section(data, ("size", "gutter", "screen"), source_file, optional=True)
            for screen_name, definition in gutters.items():
                if not isinstance(definition, dict) or "value" not in definition:
                    continue
                mu = leading_number(definition["value"])
                if mu is None:
                    logger.warning(f"Gutter {screen_name} has no numeric value, skipped")
                    continue
                px = format_number(mu * MAGIC_UNIT_PX)
                tokens.append(Token(
                    category="grid",
                    subcategory="gutter",
                    name=f"gutter-{screen_name}",
                    path=f"grid.gutter.screen.{screen_name}",
                    css_variable=f"--grid-gutter-{screen_name}",
                    scss_variable=f"$size-gutter-screen-{screen_name}",
                    value_raw=f"{format_number(mu)}mu",
                    value_number=mu,
                    value_unit="mu",
                    value_computed=f"{px}px",
                    description=(
                        f"Grid gutter for {screen_name} screens "
                        f"({format_number(mu)} magic units = {px}px)"
                    ),
                    source_file=source_file,
                ))

        data, source_file = self._size_file("base.json")
        if data is not None:
            magic = data.get("magic-unit")
            if isinstance(magic, dict) and leading_number(magic.get("value", "")) is not None:
                mu = leading_number(magic["value"])
                tokens.append(Token(
                    category="grid",
                    subcategory="base",
                    name="magic-unit",
                    path="grid.magic-unit",
                    css_variable="--magic-unit",
                    scss_variable="$magic-unit",
                    value_raw=format_number(mu),
                    value_number=mu,
                    value_computed=f"{format_number(mu * MAGIC_UNIT_PX)}px",
                    description="Base magic unit multiplier (1mu = 16px)",
                    source_file=source_file,
                ))

            rem = data.get("local-rem-value")
            if isinstance(rem, dict) and leading_number(rem.get("value", "")) is not None:
                px = leading_number(rem["value"])
                tokens.append(Token(
                    category="grid",
                    subcategory="base",
                    name="local-rem-value",
                    path="grid.local-rem-value",
                    css_variable="--local-rem-value",
                    scss_variable="$local-rem-value",
                    value_raw=f"{format_number(px)}px",
                    value_number=px,
                    value_unit="px",
                    value_computed=f"{format_number(px)}px",
                    description="Base rem value (1rem = 16px)",
                    source_file=source_file,
                ))

        return tokens
