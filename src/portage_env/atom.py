"""Package atoms — parsing and rendering versioned package specifiers.

Portage names packages with **atoms**: a ``category/package`` pair,
optionally pinned to a version with a comparison operator in front::

    dev-lang/python            any version
    >=dev-lang/python-3.12     3.12 or newer
    =sys-libs/glibc-2.39-r3    exactly this revision

This module provides three building blocks:

**VersionOperator** — the five comparison tokens ``<``, ``<=``, ``=``,
    ``>=`` and ``>``.  The mapping between tokens and members is a total
    bijection, so rendering an operator always gives back its token.

**VersionConstraint** — an (operator, version) pair.  The version is
    opaque text: it is stored verbatim and never compared numerically.

**Atom** — an immutable (category, package, constraint) value.  Equality
    and hashing are structural over all three fields, so atoms can live
    in sets and be compared across environment mappings.

Parsing is a small hand-written scanner rather than a regular
expression:

    1. Strip the leading run of ``<``, ``=`` and ``>`` characters.
    2. If there was a run, find a ``/`` followed by a package name and a
       ``-`` plus a digit-led version (the rightmost such hyphen wins).
    3. Otherwise split at the last ``/`` into category and package.  An
       operator run with no version found stays in the category, so
       ``>=cat/pkg`` renders back unchanged.
"""

import string
from dataclasses import dataclass
from enum import Enum

_OPERATOR_CHARS = "<=>"


class AtomParseError(ValueError):
    """Raised when text is not a valid package atom."""


class VersionOperator(Enum):
    """Comparison operator in front of a versioned atom.

    Each member's value is its textual token, so ``VersionOperator("<=")``
    and ``str(VersionOperator.LESS_OR_EQUAL)`` are inverses.
    """

    LESS_THAN = "<"
    LESS_OR_EQUAL = "<="
    EQUAL = "="
    GREATER_OR_EQUAL = ">="
    GREATER_THAN = ">"

    @classmethod
    def from_token(cls, token: str) -> "VersionOperator":
        """Look up the operator for *token*.

        Raises:
            AtomParseError: If *token* is not one of the five operators.

        """
        try:
            return cls(token)
        except ValueError:
            msg = f"Invalid atom version operator '{token}'"
            raise AtomParseError(msg) from None

    def __str__(self) -> str:
        """Return the textual token (e.g. ``>=``)."""
        return self.value


@dataclass(frozen=True)
class VersionConstraint:
    """A version pin: an operator plus an opaque version string."""

    operator: VersionOperator
    version: str

    def __str__(self) -> str:
        """Format as ``<op> <version>`` for diagnostics."""
        return f"{self.operator} {self.version}"


@dataclass(frozen=True)
class Atom:
    """A package specifier, optionally version-constrained.

    Frozen dataclass gives us immutability plus ``__eq__`` and
    ``__hash__`` over every field.  No normalisation happens: case and
    version spelling must match exactly for two atoms to be equal.

    Attributes:
        category: The package category (e.g. ``dev-lang``).
        package: The package name (e.g. ``python``).
        version_constraint: The optional operator/version pin.

    """

    category: str
    package: str
    version_constraint: VersionConstraint | None = None

    @property
    def key(self) -> str:
        """Return the unversioned ``category/package`` form."""
        return f"{self.category}/{self.package}"

    @property
    def operator(self) -> VersionOperator | None:
        """Return the version operator, or None for an unversioned atom."""
        if self.version_constraint is None:
            return None
        return self.version_constraint.operator

    @property
    def version(self) -> str | None:
        """Return the version string, or None for an unversioned atom."""
        if self.version_constraint is None:
            return None
        return self.version_constraint.version

    def __str__(self) -> str:
        """Render the canonical ``[op]category/package[-version]`` text."""
        if self.version_constraint is None:
            return self.key
        constraint = self.version_constraint
        return f"{constraint.operator}{self.key}-{constraint.version}"


def _split_version(text: str) -> tuple[str, str] | None:
    """Split ``name-1.2.3`` at the rightmost hyphen that precedes a digit."""
    for index in range(len(text) - 2, -1, -1):
        if text[index] == "-" and text[index + 1] in string.digits:
            return text[:index], text[index + 1 :]
    return None


def _parse_versioned(operator_token: str, remainder: str) -> Atom | None:
    """Parse the ``category/package-version`` part that follows an operator.

    Returns None when no digit-led version follows a ``/``.  The operator
    is only validated once a version has been found.
    """
    # Try separators right to left so the category stays as long as possible.
    slash = remainder.rfind("/")
    while slash != -1:
        split = _split_version(remainder[slash + 1 :])
        if split is not None:
            package, version = split
            operator = VersionOperator.from_token(operator_token)
            return Atom(
                category=remainder[:slash],
                package=package,
                version_constraint=VersionConstraint(operator, version),
            )
        slash = remainder.rfind("/", 0, slash)
    return None


def parse_atom(text: str) -> Atom:
    """Parse *text* into an Atom.

    Args:
        text: An atom such as ``dev-lang/python`` or ``>=dev-lang/python-3.12``.

    Returns:
        The parsed atom.

    Raises:
        AtomParseError: If the text has no ``/`` separator, or if a
            versioned atom starts with an unknown operator run.

    """
    remainder = text.lstrip(_OPERATOR_CHARS)
    if "/" not in remainder:
        msg = f"Invalid package atom '{text}'"
        raise AtomParseError(msg)

    operator_token = text[: len(text) - len(remainder)]
    if operator_token:
        atom = _parse_versioned(operator_token, remainder)
        if atom is not None:
            return atom

    category, _, package = text.rpartition("/")
    return Atom(category=category, package=package)
