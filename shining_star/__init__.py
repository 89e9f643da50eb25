from shining_star.main import create_app

__all__ = [
    'create_app'
]
