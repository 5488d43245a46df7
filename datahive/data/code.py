import re


CODE_REGEXP = re.compile(r'^[A-Za-z0-9_]*$')


def isValidCode(code):
    """Determine if C{code} is valid.

    A code may only contain the characters A-Z, a-z, 0-9 and underscores.

    @param code: A C{unicode} code to validate.
    @return: C{True} if C{code} is valid, otherwise C{False}.
    """
    return code is not None and CODE_REGEXP.match(code) is not None
