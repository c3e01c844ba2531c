from .loader import load_question_bank, load_subject, load_subjects

__all__ = ["load_question_bank", "load_subject", "load_subjects"]
