"""Category-specific candidate position generation."""

from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .catalog import DeviceCategory
from .models import Candidate, DeviceSpecification, FloorPlanAnalysis, Room, UserPreferences

CandidateGenerator = Callable[[DeviceSpecification, FloorPlanAnalysis], List[Candidate]]

# Room-type suitability per device type; unlisted room types get the default
ROOM_SUITABILITY: Dict[str, Dict[str, float]] = {
    "wifi": {"living_room": 1.0, "bedroom": 0.8, "kitchen": 0.7},
    "security": {"living_room": 1.0, "kitchen": 0.8},
    "entertainment": {"living_room": 1.0, "bedroom": 0.6},
    "equipment": {"utility": 1.0, "basement": 1.0, "garage": 0.8},
}
DEFAULT_SUITABILITY = {"equipment": 0.3}

CORNER_INSET = 20
WALL_INSET = 30
RACK_INSET = 50
DOORBELL_OFFSET = 20


def calculate_room_priority(room: Room, device_type: str) -> float:
    """Priority weight in [0, 1] of a room for a device type.

    Args:
        room: Room to weigh
        device_type: One of wifi, security, entertainment, equipment, environmental

    Returns:
        Priority weight, boosted 10% for rooms over 300 sq ft and reduced
        20% for rooms under 100 sq ft
    """
    default = DEFAULT_SUITABILITY.get(device_type, 0.5)
    priority = ROOM_SUITABILITY.get(device_type, {}).get(room.type, default)

    if room.area_sqft > 300:
        priority *= 1.1
    elif room.area_sqft < 100:
        priority *= 0.8

    return min(1.0, priority)


def _mounting_height(spec: DeviceSpecification, default: float) -> float:
    return spec.mounting_height_optimal_feet or default


def _wall_positions(room: Room, margin: float = WALL_INSET) -> List[Tuple[float, float]]:
    b = room.bounds
    return [
        (b.min_x + margin, b.min_y + margin),
        (b.max_x - margin, b.min_y + margin),
        (b.min_x + margin, b.max_y - margin),
        (b.max_x - margin, b.max_y - margin),
    ]


def generate_wifi_positions(spec: DeviceSpecification, floor_plan: FloorPlanAnalysis) -> List[Candidate]:
    """Ceiling-center positions in rooms over 100 sq ft, plus an offset in large rooms."""
    height = _mounting_height(spec, 12)
    candidates = []
    for room in floor_plan.rooms:
        if room.area_sqft <= 100:
            continue
        center = room.bounds.center
        priority = calculate_room_priority(room, "wifi")
        candidates.append(Candidate(
            x=center.x, y=center.y, room_id=room.id, mounting_height=height,
            placement_type="ceiling_center", priority=priority,
        ))
        if room.area_sqft > 400:
            candidates.append(Candidate(
                x=center.x - room.bounds.width * 0.25, y=center.y, room_id=room.id,
                mounting_height=height, placement_type="ceiling_offset", priority=priority * 0.8,
            ))
    return candidates


def generate_camera_positions(spec: DeviceSpecification, floor_plan: FloorPlanAnalysis) -> List[Candidate]:
    """Inset corners of every room."""
    height = _mounting_height(spec, 8)
    candidates = []
    for room in floor_plan.rooms:
        priority = calculate_room_priority(room, "security")
        for x, y in _wall_positions(room, CORNER_INSET):
            candidates.append(Candidate(
                x=x, y=y, room_id=room.id, mounting_height=height,
                placement_type="corner_mount", priority=priority,
            ))
    return candidates


def generate_entertainment_positions(spec: DeviceSpecification, floor_plan: FloorPlanAnalysis) -> List[Candidate]:
    """Wall positions in living rooms and rooms over 200 sq ft."""
    height = _mounting_height(spec, 6)
    candidates = []
    for room in floor_plan.rooms:
        if room.type != "living_room" and room.area_sqft <= 200:
            continue
        priority = calculate_room_priority(room, "entertainment")
        for x, y in _wall_positions(room):
            candidates.append(Candidate(
                x=x, y=y, room_id=room.id, mounting_height=height,
                placement_type="wall_mount", priority=priority,
            ))
    return candidates


def generate_security_positions(spec: DeviceSpecification, floor_plan: FloorPlanAnalysis) -> List[Candidate]:
    """One motion corner per room and one position on every door."""
    candidates = []
    for room in floor_plan.rooms:
        candidates.append(Candidate(
            x=room.bounds.max_x - WALL_INSET, y=room.bounds.min_y + WALL_INSET, room_id=room.id,
            mounting_height=7, placement_type="corner_motion",
            priority=calculate_room_priority(room, "security"),
        ))
    for door in floor_plan.doors:
        candidates.append(Candidate(
            x=door.position.x, y=door.position.y, room_id=None,
            mounting_height=7, placement_type="door_sensor", priority=1.0,
        ))
    return candidates


def generate_doorbell_positions(spec: DeviceSpecification, floor_plan: FloorPlanAnalysis) -> List[Candidate]:
    """Beside every exterior door."""
    return [
        Candidate(
            x=door.position.x + DOORBELL_OFFSET, y=door.position.y, room_id=None,
            mounting_height=4, placement_type="doorbell_mount", priority=1.0,
        )
        for door in floor_plan.doors
        if door.type == "exterior"
    ]


def generate_equipment_rack_positions(spec: DeviceSpecification, floor_plan: FloorPlanAnalysis) -> List[Candidate]:
    """Floor positions outside living rooms and bedrooms."""
    return [
        Candidate(
            x=room.bounds.min_x + RACK_INSET, y=room.bounds.min_y + RACK_INSET, room_id=room.id,
            mounting_height=0, placement_type="floor_rack",
            priority=calculate_room_priority(room, "equipment"),
        )
        for room in floor_plan.rooms
        if room.type not in ("living_room", "bedroom")
    ]


def generate_environmental_positions(spec: DeviceSpecification, floor_plan: FloorPlanAnalysis) -> List[Candidate]:
    """One wall position per room, 30% across and halfway down."""
    height = _mounting_height(spec, 5)
    return [
        Candidate(
            x=room.bounds.min_x + room.bounds.width * 0.3,
            y=room.bounds.min_y + room.bounds.height * 0.5,
            room_id=room.id, mounting_height=height, placement_type="wall_mount",
            priority=calculate_room_priority(room, "environmental"),
        )
        for room in floor_plan.rooms
    ]


def generate_generic_positions(spec: DeviceSpecification, floor_plan: FloorPlanAnalysis) -> List[Candidate]:
    """Room centers with a flat priority."""
    height = _mounting_height(spec, 8)
    return [
        Candidate(
            x=room.bounds.center.x, y=room.bounds.center.y, room_id=room.id,
            mounting_height=height, placement_type="center", priority=0.5,
        )
        for room in floor_plan.rooms
    ]


CANDIDATE_GENERATORS: Dict[int, CandidateGenerator] = {
    DeviceCategory.WIFI: generate_wifi_positions,
    DeviceCategory.SECURITY_CAMERAS: generate_camera_positions,
    DeviceCategory.ENTERTAINMENT: generate_entertainment_positions,
    DeviceCategory.SECURITY_DEVICES: generate_security_positions,
    DeviceCategory.DOORBELLS: generate_doorbell_positions,
    DeviceCategory.CENTRAL_EQUIPMENT: generate_equipment_rack_positions,
    DeviceCategory.ENVIRONMENTAL: generate_environmental_positions,
}


def generate_candidates(spec: DeviceSpecification, floor_plan: FloorPlanAnalysis) -> List[Candidate]:
    """Generate candidates for a device using its category's strategy."""
    generator = CANDIDATE_GENERATORS.get(spec.category_id, generate_generic_positions)
    return generator(spec, floor_plan)


def apply_room_priorities(
    candidates: Sequence[Candidate],
    rooms: Sequence[Room],
    preferences: Optional[UserPreferences],
    factors: Tuple[float, float, float] = (1.2, 1.0, 0.8),
) -> List[Candidate]:
    """Scale candidate priorities by the user's room priority overrides.

    Overrides match a room by id or by name, case-insensitively.

    Args:
        candidates: Generated candidates
        rooms: Floor plan rooms
        preferences: User preferences (None leaves candidates unchanged)
        factors: Multipliers for high, medium and low priority

    Returns:
        New list of candidates with adjusted priorities, clamped to 1.0
    """
    if preferences is None or not preferences.room_priorities:
        return list(candidates)

    factor_by_level = dict(zip(("high", "medium", "low"), factors))
    room_factor: Dict[str, float] = {}
    for override in preferences.room_priorities:
        key = override.room.strip().lower()
        for room in rooms:
            if key in (room.id.lower(), room.name.lower()):
                room_factor[room.id] = factor_by_level[override.priority]

    adjusted = []
    for candidate in candidates:
        factor = room_factor.get(candidate.room_id) if candidate.room_id else None
        if factor is None:
            adjusted.append(candidate)
        else:
            adjusted.append(candidate.model_copy(update={"priority": min(1.0, candidate.priority * factor)}))
    return adjusted
