from settracker.models.set_row import SetRow

__all__ = ["SetRow"]
