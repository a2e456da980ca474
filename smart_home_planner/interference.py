"""Radio interference tracking between placed devices."""

from typing import List, Sequence, Tuple

import numpy as np
from scipy.spatial import distance

from .metrics import round_half_up
from .models import (
    Candidate,
    DeviceSpecification,
    InterferenceConflict,
    InterferenceReport,
    Placement,
)

CommittedDevice = Tuple[Placement, DeviceSpecification]

FREQUENCY_TOLERANCE_GHZ = 0.1
DEFAULT_RADIUS_FEET = 25.0


def calculate_interference(
    candidate: Candidate,
    spec: DeviceSpecification,
    committed: Sequence[CommittedDevice],
    scale: float,
    tolerance_ghz: float = FREQUENCY_TOLERANCE_GHZ,
) -> float:
    """Interference penalty of a candidate against committed devices.

    Each committed device on a frequency within the tolerance adds
    ``50 * (1 - d / r)`` when the candidate lies inside its coverage
    radius ``r`` (in pixels).

    Args:
        candidate: Position being evaluated
        spec: Specification of the device being placed
        committed: Already placed devices with their specifications
        scale: Pixels per foot
        tolerance_ghz: Maximum frequency difference counted as shared

    Returns:
        Penalty, 0 when the device has no interference frequency
    """
    if spec.interference_frequency_ghz is None:
        return 0.0

    penalty = 0.0
    for placement, other in committed:
        if other.interference_frequency_ghz is None:
            continue
        if abs(other.interference_frequency_ghz - spec.interference_frequency_ghz) >= tolerance_ghz:
            continue

        d = distance.euclidean((candidate.x, candidate.y), (placement.position.x, placement.position.y))
        radius = (other.coverage_radius_feet or DEFAULT_RADIUS_FEET) * scale
        if d < radius:
            penalty += 50 * (1 - d / radius)

    return penalty


class InterferenceManager:
    """Accumulates committed placements for one optimization run."""

    def __init__(
        self,
        scale: float,
        tolerance_ghz: float = FREQUENCY_TOLERANCE_GHZ,
        conflict_factor: float = 0.7,
    ):
        """Initialize an empty manager.

        Args:
            scale: Pixels per foot of the floor plan
            tolerance_ghz: Frequency tolerance for the placement penalty
            conflict_factor: Fraction of the larger radius that counts as a conflict
        """
        self.scale = scale
        self.tolerance_ghz = tolerance_ghz
        self.conflict_factor = conflict_factor
        self.devices: List[CommittedDevice] = []

    def add_device(self, placement: Placement, spec: DeviceSpecification) -> None:
        self.devices.append((placement, spec))

    def calculate_interference(self, candidate: Candidate, spec: DeviceSpecification) -> float:
        return calculate_interference(candidate, spec, self.devices, self.scale, self.tolerance_ghz)

    def get_interference_report(self) -> InterferenceReport:
        """Scan all committed pairs sharing a frequency for conflicts.

        Each unordered pair is reported at most once.

        Returns:
            InterferenceReport with level, conflicts and recommendations
        """
        radio = [
            (placement, spec)
            for placement, spec in self.devices
            if spec.interference_frequency_ghz is not None
        ]
        conflicts: List[InterferenceConflict] = []

        if len(radio) > 1:
            points = np.array([[p.position.x, p.position.y] for p, _ in radio], dtype=float)
            distances = distance.squareform(distance.pdist(points))

            for i in range(len(radio)):
                for j in range(i + 1, len(radio)):
                    first, first_spec = radio[i]
                    second, second_spec = radio[j]
                    if first_spec.interference_frequency_ghz != second_spec.interference_frequency_ghz:
                        continue

                    min_distance = max(
                        first_spec.coverage_radius_feet or DEFAULT_RADIUS_FEET,
                        second_spec.coverage_radius_feet or DEFAULT_RADIUS_FEET,
                    ) * self.scale
                    d = float(distances[i, j])
                    if d < min_distance * self.conflict_factor:
                        conflicts.append(InterferenceConflict(
                            device1=first.instance_name,
                            device2=second.instance_name,
                            distance=round_half_up(d / self.scale),
                            severity="medium",
                        ))

        if not conflicts:
            level = "low"
        elif len(conflicts) < 3:
            level = "medium"
        else:
            level = "high"

        recommendations = []
        if conflicts:
            recommendations = [
                "Maintain recommended separation distances between devices on the same frequency",
                "Consider adjusting channels or frequencies to minimize interference",
            ]

        return InterferenceReport(
            interference_level=level,
            conflicts=conflicts,
            recommendations=recommendations,
        )
