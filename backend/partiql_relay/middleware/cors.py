from __future__ import annotations


def build_allowed_origins(cors_allow_origins: str | None) -> list[str]:
    """
    Parse a comma-separated origin list. "*" (or an empty value) allows any origin,
    which is what a local query console served from another port needs.
    """
    origins = [s.strip() for s in str(cors_allow_origins or "").split(",") if s.strip()]
    if not origins or "*" in origins:
        return ["*"]
    return sorted(set(origins))
