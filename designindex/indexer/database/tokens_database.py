"""Token database operations.

add_* methods for TOKENS_TABLES defined in schemas/tokens_schema.py.
"""

from ..models import Token


class TokensDatabaseMixin:
    """Mixin providing add_* methods for TOKENS_TABLES.

    CRITICAL: This mixin assumes self.generic_batches exists (from BaseDatabaseManager).
    DO NOT instantiate directly - only use as mixin for DatabaseManager.
    """

    def add_token(self, token: Token) -> int:
        """Stage a token and its properties. Returns the temporary parent id."""
        temp_id = self.next_temp_id()
        self.generic_batches["tokens"].append((
            temp_id,
            token.category,
            token.subcategory,
            token.name,
            token.path,
            token.css_variable,
            token.scss_variable,
            token.value_raw,
            token.value_number,
            token.value_unit,
            token.value_computed,
            token.description,
            token.platform or "all",
            token.source_file,
        ))

        for prop in token.properties:
            self.generic_batches["token_properties"].append(
                (temp_id, prop.property, prop.value, prop.value_number, prop.value_unit)
            )

        self.maybe_flush()
        return temp_id

    def insert_tokens(self, tokens: list[Token]) -> dict[str, int]:
        """Store ``tokens`` in one transaction. Returns rows stored per table."""
        with self.category_transaction("tokens") as receipt:
            for token in tokens:
                self.add_token(token)
        return dict(receipt)
