from app.models.credential import ApiCredential

__all__ = [
    "ApiCredential",
]
