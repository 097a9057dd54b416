"""wx-html-cleaner - strip saved web articles down to readable, minimal HTML."""

__version__ = "0.1.0"

from wx_html_cleaner.cleaner import clean
from wx_html_cleaner.models import BatchReport, CleaningResult
from wx_html_cleaner.naming import cleaned_filename, suggest_title

__all__ = ["BatchReport", "CleaningResult", "clean", "cleaned_filename", "suggest_title"]
