from .titles import format_paper_title, subject_abbreviation

__all__ = ["format_paper_title", "subject_abbreviation"]
