import hmac


def validate_console_token(received: str, expected: str | None) -> bool:
    """Check an X-Console-Token header against the configured token."""
    if not expected or not received:
        return False
    return hmac.compare_digest(expected.encode(), received.encode())
