from bs4 import BeautifulSoup


def strip_html(content: str, separator: str = "") -> str:
    """Plain text of an HTML fragment with whitespace collapsed."""
    if not content:
        return ""
    if "<" not in content and "&" not in content:
        return " ".join(content.split())

    soup = BeautifulSoup(content, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return " ".join(soup.get_text(separator=separator).split())


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length].rstrip()
