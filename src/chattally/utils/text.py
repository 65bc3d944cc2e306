import unicodedata


def _is_other(char: str) -> bool:
    # Cc, Cf, Cs, Co and Cn all share the "C" major category.
    return unicodedata.category(char).startswith("C")


def normalize(raw: str) -> str:
    """Reduce a chat message to the key used for dedup and tallying.

    Drops Unicode "other" category characters (controls, format marks,
    surrogates, private use, unassigned), case-folds, and trims whitespace.
    """
    stripped = "".join(char for char in raw if not _is_other(char))
    return stripped.casefold().strip()
