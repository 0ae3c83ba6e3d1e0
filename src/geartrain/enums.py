"""Type-safe enums for the gear train calculator."""

from enum import Enum


class Member(Enum):
    """Coaxial member of a planetary stage"""
    SUN = "sun"
    CARRIER = "carrier"
    RING = "ring"


class Role(Enum):
    """What a planetary member does in its stage"""
    INPUT = "input"
    OUTPUT = "output"
    FIXED = "fixed"


class KinematicCase(Enum):
    """
    The six valid planetary configurations.

    Keyed by which member is fixed and which of the remaining two drives.
    A stage with no fixed member has no case, so it cannot be represented.
    """
    RING_TO_CARRIER = "ring->carrier"  # Sun fixed
    CARRIER_TO_RING = "carrier->ring"  # Sun fixed
    SUN_TO_CARRIER = "sun->carrier"    # Ring fixed
    CARRIER_TO_SUN = "carrier->sun"    # Ring fixed
    SUN_TO_RING = "sun->ring"          # Carrier fixed, reverses direction
    RING_TO_SUN = "ring->sun"          # Carrier fixed, reverses direction

    @property
    def fixed(self) -> Member:
        return _CASE_MEMBERS[self][0]

    @property
    def input(self) -> Member:
        return _CASE_MEMBERS[self][1]

    @property
    def output(self) -> Member:
        return _CASE_MEMBERS[self][2]

    @property
    def reverses_direction(self) -> bool:
        return self.fixed is Member.CARRIER

    @property
    def description(self) -> str:
        """Human readable label, e.g. 'Sun->Ring (Carrier fixed)'"""
        return (
            f"{self.input.value.title()}->{self.output.value.title()} "
            f"({self.fixed.value.title()} fixed)"
        )

    @classmethod
    def from_members(cls, fixed: Member, driving: Member) -> "KinematicCase":
        for case, (case_fixed, case_input, _) in _CASE_MEMBERS.items():
            if case_fixed is fixed and case_input is driving:
                return case
        raise ValueError(f"No kinematic case with {fixed.value} fixed and {driving.value} as input")


# (fixed, input, output) for each case
_CASE_MEMBERS = {
    KinematicCase.RING_TO_CARRIER: (Member.SUN, Member.RING, Member.CARRIER),
    KinematicCase.CARRIER_TO_RING: (Member.SUN, Member.CARRIER, Member.RING),
    KinematicCase.SUN_TO_CARRIER: (Member.RING, Member.SUN, Member.CARRIER),
    KinematicCase.CARRIER_TO_SUN: (Member.RING, Member.CARRIER, Member.SUN),
    KinematicCase.SUN_TO_RING: (Member.CARRIER, Member.SUN, Member.RING),
    KinematicCase.RING_TO_SUN: (Member.CARRIER, Member.RING, Member.SUN),
}
