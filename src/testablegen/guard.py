DEFAULT_BUILD_FLAG = "TESTING"


def wrap(declaration_text: str, flag: str = DEFAULT_BUILD_FLAG) -> str:
    """Guard `declaration_text` so it only compiles when `flag` is set."""
    return f"#if {flag}\n{declaration_text}\n#endif"
