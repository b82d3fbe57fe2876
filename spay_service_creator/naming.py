"""Naming rules for Spay services.

Validators check raw user input against the service-name and package-name
conventions and raise :class:`InvalidFormatError` with a readable reason.
Derivers turn an already-validated service name into the secondary values
(class name, title, package suggestion, database name, description).  The
derivers never validate their input; that is the caller's job.

Examples::

    derive_service_class("payment-service")      -> "PaymentService"
    derive_service_title("payment-service")      -> "Payment Service"
    derive_package_suggestion("payment-service") -> "com.spaybusiness.payment.service.service"
    derive_db_name("payment-service")            -> "payment_service"
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SERVICE_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9-]*[a-z0-9]$")
PACKAGE_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9]*(\.[a-z][a-z0-9]*)*$")

ORG_PACKAGE_ROOT = "com.spaybusiness"
PACKAGE_SUFFIX = "service"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class InvalidFormatError(ValueError):
    """Raised when user input does not follow a naming convention."""

    def __init__(self, value: str, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(reason)


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def validate_service_name(name: str) -> str:
    """Return *name* unchanged if it is a valid service name.

    A service name is lowercase, starts with a letter, ends with a letter or
    digit and otherwise contains only letters, digits and hyphens.  Single
    characters are rejected because they cannot satisfy both anchors.

    Raises:
        InvalidFormatError: If the name breaks any of the rules.
    """
    if not SERVICE_NAME_PATTERN.match(name):
        raise InvalidFormatError(
            name,
            "Service name must be lowercase, start with a letter, and contain "
            "only letters, numbers, and hyphens",
        )
    return name


def validate_package_name(name: str) -> str:
    """Return *name* unchanged if it is a valid dotted package name.

    Raises:
        InvalidFormatError: If any segment is empty, uppercase or starts
            with a digit.
    """
    if not PACKAGE_NAME_PATTERN.match(name):
        raise InvalidFormatError(
            name,
            "Package name must be valid Java package format "
            "(e.g., com.spaybusiness.payment.service)",
        )
    return name


# ---------------------------------------------------------------------------
# Derivers
# ---------------------------------------------------------------------------


def _segments(service_name: str) -> list[str]:
    """Split a service name on hyphens, dropping empty segments."""
    return [part for part in service_name.split("-") if part]


def _capitalize(segment: str) -> str:
    return segment[:1].upper() + segment[1:]


def derive_service_class(service_name: str) -> str:
    """Convert ``payment-service`` to ``PaymentService``."""
    return "".join(_capitalize(part) for part in _segments(service_name))


def derive_service_title(service_name: str) -> str:
    """Convert ``payment-service`` to ``Payment Service``."""
    return " ".join(_capitalize(part) for part in _segments(service_name))


def derive_package_suggestion(service_name: str) -> str:
    """Suggest a package name, e.g. ``com.spaybusiness.payment.service.service``.

    Hyphens become dots.  A segment starting with a digit cannot start a
    package segment, so it is glued onto the previous one
    (``api-2fa`` -> ``api2fa``).
    """
    parts: list[str] = []
    for segment in _segments(service_name):
        if parts and segment[0].isdigit():
            parts[-1] += segment
        else:
            parts.append(segment)
    return ".".join([ORG_PACKAGE_ROOT, *parts, PACKAGE_SUFFIX])


def derive_db_name(service_name: str) -> str:
    """Convert ``payment-service`` to ``payment_service``."""
    return service_name.replace("-", "_")


def derive_description(service_name: str) -> str:
    """Default one-line description for a service."""
    return f"Spay {service_name.replace('-', ' ')} microservice"
