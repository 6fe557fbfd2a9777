"""Unit tests for the React component extractor."""

import pytest

from designindex.indexer.core import MemoryFileSource
from designindex.indexer.extractors.react import (
    InlineInterfaceStrategy,
    ReactExtractor,
    collect_interfaces,
    extract_const_arrays,
    parse_extends,
    props_from_interface,
    resolve_const_options,
)
from designindex.indexer.extractors.strategies import (
    ComponentContext,
    extract_callback_events,
    infer_category,
    parse_stories,
    union_options,
)

from conftest import REACT


class TestTypeHelpers:

    def test_const_arrays(self):
        content = "export const sizes = ['s', 'm', 'l'] as const;\nconst other = [1, 2];"
        assert extract_const_arrays(content) == {"sizes": ["s", "m", "l"]}

    def test_const_type_reference_resolves_options(self):
        arrays = {"size": ["s", "m"]}
        assert resolve_const_options("TButtonSize", arrays) == ["s", "m"]
        assert resolve_const_options("string", arrays) is None

    def test_extends_drops_omit_and_html_attributes(self):
        clause = "IBase, Omit<IOther, 'x'>, HTMLAttributes<HTMLDivElement>, IWithGeneric<T>"
        assert parse_extends(clause) == ["IBase", "IWithGeneric"]

    def test_union_options(self):
        assert union_options("'s' | 'm' | undefined") == ["s", "m"]
        assert union_options("string | number") is None
        assert union_options("string | number", literals_only=False) == ["string", "number"]
        assert union_options("'only'") is None


class TestPropsFromInterface:

    TYPES = """
export interface IBase {
  /** Identifier */
  id?: string;
}

export interface IButtonProps extends IBase {
  variant: 'solid' | 'bordered';
  id?: number;
  children?: ReactNode;
  className?: string;
  onClick?: (event: MouseEvent) => void;
}
"""

    def test_extended_props_come_first(self):
        props = props_from_interface("IButtonProps", collect_interfaces(self.TYPES), {})
        assert [p.name for p in props] == ["id", "variant"]

    def test_first_occurrence_wins(self):
        props = props_from_interface("IButtonProps", collect_interfaces(self.TYPES), {})
        assert props[0].type == "string"
        assert props[0].description == "Identifier"

    def test_callbacks_children_and_class_name_are_not_props(self):
        names = {p.name for p in props_from_interface("IButtonProps", collect_interfaces(self.TYPES), {})}
        assert not names & {"children", "className", "onClick"}

    def test_cyclic_extends_terminates(self):
        types = "interface IA extends IB { a: string; }\ninterface IB extends IA { b: string; }"
        props = props_from_interface("IA", collect_interfaces(types), {})
        assert sorted(p.name for p in props) == ["a", "b"]


class TestInlineInterfaceStrategy:

    def test_union_becomes_string_with_options(self):
        source = """
type TagProps = {
  size?: 's' | 'm';
  Label: String;
};
"""
        ctx = ComponentContext(name="Tag", directory="Tag", source=MemoryFileSource({}))
        props = {p.name: p for p in InlineInterfaceStrategy().extract(source, ctx)}

        assert props["size"].type == "string"
        assert props["size"].options == ["s", "m"]
        assert props["Label"].type == "string"


class TestCallbackEvents:

    def test_arrow_and_handler_callbacks(self):
        content = """
  onChange?: (value: string) => void;
  onClose: () => void;
  onFocus?: FocusEventHandler<HTMLInputElement>;
"""
        events = {e.name: e for e in extract_callback_events(content)}
        assert events["onChange"].payload == "value: string"
        assert events["onChange"].description == "Change event callback"
        assert events["onClose"].payload is None
        assert "onFocus" in events


class TestStories:

    def test_inline_args_and_skipped_default(self):
        content = """
export const Default: Story = { args: { children: 'Hi' } };
export const Outlined: Story = {
  args: { variant: 'outlined' },
};
"""
        examples = parse_stories(content, "react")
        assert [(x.framework, x.title) for x in examples] == [("react", "Outlined")]
        assert examples[0].code == "variant: 'outlined'"

    def test_camel_case_title(self):
        content = "export const WithIcon = Template.bind({});\nWithIcon.args = { icon: 'x' };"
        assert parse_stories(content, "vue")[0].title == "With Icon"


class TestCategoryInference:

    @pytest.mark.parametrize("name,category", [
        ("Button", "action"),
        ("MTextInput", "form"),
        ("Breadcrumb", "navigation"),
        ("MNotification", "feedback"),
        ("Card", "layout"),
        ("Tag", "data-display"),
        ("Spinner", "other"),
    ])
    def test_first_matching_group(self, name, category):
        assert infer_category(name) == category


# ============================================================================
# Extractor
# ============================================================================

class TestReactExtractor:

    @pytest.fixture
    def components(self, memory_source):
        return {c.name: c for c in ReactExtractor(REACT, memory_source).extract()}

    def test_discovers_pascal_case_directories(self, components):
        assert sorted(components) == ["Button", "Tag"]

    def test_external_types_file(self, components):
        button = components["Button"]
        assert button.slug == "button"
        assert button.frameworks == ["react"]

        props = {p.name: p for p in button.props}
        assert list(props) == ["id", "size", "variant"]
        assert props["size"].options == ["s", "m", "l"]
        assert props["variant"].required is True
        assert props["variant"].options == ["solid", "bordered"]

    def test_callbacks_become_events(self, components):
        events = components["Button"].events
        assert [e.name for e in events] == ["onClick"]
        assert events[0].payload == "event: React.MouseEvent<HTMLButtonElement>"

    def test_children_slot_and_classes(self, components):
        button = components["Button"]
        assert [s.name for s in button.slots] == ["children"]
        assert button.css_classes == ["mc-button"]

    def test_stories_directory(self, components):
        examples = components["Button"].examples
        assert [x.title for x in examples] == ["Bordered"]
        assert "variant: 'bordered'" in examples[0].code

    def test_inline_props_in_index_tsx(self, components):
        tag = components["Tag"]
        assert tag.category == "data-display"
        assert [(p.name, p.type) for p in tag.props] == [("size", "string"), ("label", "string")]
        assert [e.name for e in tag.events] == ["onRemove"]
        assert tag.slots == []
        assert tag.css_classes == ["mc-tag"]
