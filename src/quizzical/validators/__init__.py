from .question_validators import validate_question

__all__ = ["validate_question"]
