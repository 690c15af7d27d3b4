from .asgi import server  # NOQA: F401

# EOF
