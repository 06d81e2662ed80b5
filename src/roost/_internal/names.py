"""Name normalisation shared by controller and listener lookup.

URL and file names are dash or underscore separated; classes are
CamelCase and modules snake_case::

    class_name("error-404")    -> "Error404"
    class_name("page_title")   -> "PageTitle"
    module_name("user-profile") -> "user_profile"
"""


def _parts(name: str) -> list[str]:
    return [part for part in name.replace("_", "-").split("-") if part]


def class_name(name: str) -> str:
    """Normalise a URL or file name to a class name."""
    return "".join(part[:1].upper() + part[1:] for part in _parts(name))


def module_name(name: str) -> str:
    """Normalise a URL or file name to a module name."""
    return "_".join(part.lower() for part in _parts(name))
