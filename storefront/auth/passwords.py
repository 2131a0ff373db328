import bcrypt


def hash_password(raw_password: str, rounds: int = 10) -> str:
    hashed = bcrypt.hashpw(raw_password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(raw_password: str, hashed_password: str | None) -> bool:
    # checkpw compares in constant time.
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(raw_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False
