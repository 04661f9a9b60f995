import re

# Invisible characters PDF producers and word processors leave behind
_INVISIBLE = r"[\u200b\u200c\u200d\u00ad\u2060\ufeff]"


def clean_text(text: str) -> str:
    """Normalize text extracted from a PDF or read from a plain-text file.

    Handles: unicode artifacts, line ending variants, inconsistent bullet
    styles, runs of spaces and excessive blank lines.
    """
    # 1. Remove unicode artifacts (BOM, zero-width spaces, soft hyphens)
    text = re.sub(_INVISIBLE, "", text)

    # 2. Normalize line endings and form feeds (page breaks)
    text = text.replace("\r\n", "\n").replace("\r", "\n").replace("\f", "\n")

    # 3. Normalize bullet points (●, •, ◦, ◆, ■, ▪, ○ → -)
    text = re.sub(r"^(\s*)[●•◦◆■▪○]\s*", r"\1- ", text, flags=re.MULTILINE)

    # 4. Collapse runs of spaces/tabs, drop trailing whitespace
    lines = [re.sub(r"[ \t]{2,}", " ", line).rstrip() for line in text.split("\n")]
    text = "\n".join(lines)

    # 5. Remove excessive blank lines (3+ → 2)
    text = re.sub(r"\n{3,}", "\n\n", text)

    return text.strip()
