"""Title normalisation for comparing local folder names with remote titles."""

import re

# Year annotations such as '(2019)', anywhere in the title
YEAR_PATTERN = re.compile(r'\(\d{4}\)')


def strip_year(title):
    """Removes '(YYYY)' annotations and trims. 'The Show (2019)' -> 'The Show'"""
    # Remote payloads sometimes carry numeric titles ('1923')
    text = '' if title is None else str(title)
    return YEAR_PATTERN.sub('', text).strip()


def normalize_title(title):
    """
    Normalizes a show title for comparison.
    '  The   Show (2019) ' -> 'the show'
    """
    clean = strip_year(title)
    # Collapse runs of whitespace, lowercase
    return re.sub(r'\s+', ' ', clean).strip().lower()


def titles_match(a, b):
    """
    True if both titles normalize to the same name. normalize_title drops year
    annotations, so 'Show (2019)' matches 'Show' whichever side carries the year.
    Two empty titles never match.
    """
    norm_a = normalize_title(a)
    return bool(norm_a) and norm_a == normalize_title(b)
