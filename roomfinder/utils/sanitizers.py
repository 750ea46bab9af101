import bleach

def sanitize_string(text, allowed_tags=None):
    """Sanitize a string by removing HTML tags and stripping whitespace"""
    if text is None:
        return ''

    text = str(text)
    if allowed_tags:
        # Allow specific HTML tags
        text = bleach.clean(text, tags=allowed_tags, strip=True)
    else:
        # Remove all HTML tags
        text = bleach.clean(text, tags=[], strip=True)

    return text.strip()
