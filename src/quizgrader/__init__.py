"""
Quiz Grader Application Package.
Serves multiple-choice questions over HTTP and grades submitted answers.
"""

__version__ = "1.0.0"
__app_name__ = "Quiz Grader"

# Package metadata
__all__ = ["__version__", "__app_name__"]
