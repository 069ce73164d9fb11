import bcrypt


def hash_access_code(code: str) -> str:
    """
    Hash the staff access code using bcrypt directly.

    bcrypt truncates at 72 *bytes* and this build raises if you exceed it,
    so enforce the limit explicitly.
    """
    if not code:
        raise ValueError("Access code is required")

    code_bytes = code.encode("utf-8")
    if len(code_bytes) > 72:
        raise ValueError("Access code must be 72 bytes or less")

    hashed = bcrypt.hashpw(code_bytes, bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_access_code(code: str, hashed: str) -> bool:
    try:
        if not code or not hashed:
            return False
        code_bytes = code.encode("utf-8")
        if len(code_bytes) > 72:
            return False
        return bcrypt.checkpw(code_bytes, hashed.encode("utf-8"))
    except ValueError:
        # Malformed hash in config.
        return False
