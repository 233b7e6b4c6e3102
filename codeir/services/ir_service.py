"""
IR placeholder service for CodeIR.

There is no compiler behind this: the "structured IR" and the translated
code are fixed placeholder strings shown in the editor and evaluation views.
"""

# Target languages offered in the editor, value -> label
LANGUAGES = {
    "javascript": "JS",
    "python": "Python",
    "cpp": "C++",
}

DEFAULT_LANGUAGE = "javascript"
EVALUATION_LANGUAGE = "python"

DEFAULT_SOURCE = "// Write your source code here..."
SANDBOX_SOURCE = (
    "// Sandbox Mode.\n"
    "// No specific student submission selected.\n"
    "// You can write code here to test."
)

DEFAULT_IR = "{\n  'block': 'entry',\n  'ops': []\n}"
VALIDATED_IR = "{\n  'status': 'valid',\n  'ir_version': '1.0',\n  'nodes': 15\n}"
NO_IR = "{\n  'status': 'No IR generated yet'\n}"

DEFAULT_TRANSLATION = "// Translated code will appear here"

DEFAULT_HINTS = [
    "Write a function to optimize the IR...",
    "Check for null pointers in your logic.",
]
SUBMIT_HINT = "Great job! Consider reducing time complexity."


def check_language(language):
    """Return the language key, defaulting empty values. Unknown -> ValueError."""
    language = (language or DEFAULT_LANGUAGE).strip().lower()
    if language not in LANGUAGES:
        raise ValueError(f"Unsupported language: {language}")
    return language


def translate(language):
    return f"// Converted to optimized {language}\nfunction opt() {{ ... }}"


def validate_source(source, language=DEFAULT_LANGUAGE):
    """Produce the IR summary and translated code for a piece of source."""
    language = check_language(language)
    return {
        "ir_output": VALIDATED_IR,
        "translated_code": translate(language),
        "language": language,
    }


def hints_after_submit(hints=None):
    """Hint list shown after a successful submission."""
    return list(hints if hints is not None else DEFAULT_HINTS) + [SUBMIT_HINT]


def editor_defaults():
    return {
        "source_code": DEFAULT_SOURCE,
        "language": DEFAULT_LANGUAGE,
        "languages": [{"value": k, "label": v} for k, v in LANGUAGES.items()],
        "ir_output": DEFAULT_IR,
        "translated_code": DEFAULT_TRANSLATION,
        "hints": list(DEFAULT_HINTS),
    }
