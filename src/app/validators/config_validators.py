def to_uppercase(value: str | None) -> str | None:
    """
    Strip and upper-case an env value (e.g. " debug" -> "DEBUG"); None passes through.
    """
    if value is None:
        return None
    return value.strip().upper()

def to_lowercase(value: str | None) -> str | None:
    """
    Strip and lower-case an env value (e.g. "JSON " -> "json"); None passes through.
    """
    if value is None:
        return None
    return value.strip().lower()
