from hunt.models.submission import Submission

__all__ = ["Submission"]
