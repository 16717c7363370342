from .werkzeug_hasher import WerkzeugHasher

__all__ = ["WerkzeugHasher"]
