"""Exceptions raised by the conversion layer itself."""


class PolicyHelpersError(Exception):
    """
    Base exception for failures originating in policy_helpers.
    """

    pass


class InvalidEnumVariantError(PolicyHelpersError, ValueError):
    """
    Raised when a value outside a closed enumeration reaches the codec.

    This signals a programming defect (an unchecked value passed off as a
    DecisionType or Severity), not a recoverable condition.
    """

    def __init__(self, enum_name: str, value: object) -> None:
        super().__init__(f"Unreachable {enum_name} variant: {value!r}")
        self.enum_name = enum_name
        self.value = value
