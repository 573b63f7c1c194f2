"""URL building utilities for short links."""


def build_short_url(
    short_code: str,
    base_url: str,
    *path_prefixes: str,
) -> str:
    """Build the complete public URL of a short code.

    Args:
        short_code: The short code
        base_url: Base URL (e.g., https://example.com)
        path_prefixes: Path segments placed before the code (e.g., '/links', '/r')

    Returns:
        Complete short URL, e.g. https://example.com/r/abc123
    """
    parts = [base_url.rstrip("/")]
    parts.extend(p.strip("/") for p in path_prefixes if p and p.strip("/"))
    parts.append(short_code)
    return "/".join(parts)
