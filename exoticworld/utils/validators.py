def require_positive_int(text: str, name: str = "value") -> int:
    v = int(text.strip())
    if v <= 0:
        raise ValueError(f"{name} must be > 0")
    return v
