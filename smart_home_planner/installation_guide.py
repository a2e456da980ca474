"""Installation guide generation."""

from typing import Dict, List, Sequence

from .models import (
    CalculatedDevice,
    InstallationGuide,
    InstallationStep,
    RackConfiguration,
    TroubleshootingEntry,
)

SAFETY_REQUIREMENTS = [
    "Licensed electrician required for new circuit installation",
    "Follow local electrical codes and obtain permits",
    "Use proper PPE when working with electrical systems",
    "Test all safety devices before declaring system operational",
]

WARRANTY_INFO = [
    "Keep all device receipts and warranty information",
    "Register devices with manufacturers for warranty coverage",
    "Document installation dates for warranty tracking",
    "Schedule periodic maintenance to maintain warranty coverage",
]

GENERAL_TROUBLESHOOTING = [
    TroubleshootingEntry(
        problem="Device not connecting to network",
        solutions=[
            "Verify network credentials are correct",
            "Check device is within WiFi range",
            "Restart router and device",
            "Update device firmware",
            "Check for interference from other devices",
        ],
    ),
    TroubleshootingEntry(
        problem="Intermittent connectivity issues",
        solutions=[
            "Check network bandwidth and usage",
            "Verify adequate WiFi coverage in device location",
            "Consider adding WiFi extender or mesh node",
            "Check for physical obstructions",
            "Update router firmware",
        ],
    ),
    TroubleshootingEntry(
        problem="Device responds slowly or not at all",
        solutions=[
            "Check device power supply",
            "Verify network connection stability",
            "Restart the device",
            "Check mobile app for updates",
            "Reset device to factory defaults if necessary",
        ],
    ),
]

CAMERA_TROUBLESHOOTING = TroubleshootingEntry(
    problem="Security camera video quality issues",
    solutions=[
        "Check network bandwidth availability",
        "Adjust camera resolution settings",
        "Clean camera lens",
        "Verify adequate lighting conditions",
        "Check for network congestion",
    ],
)


def _step(category: str, title: str, description: str, tools, materials, minutes: int, safety) -> Dict:
    return {
        "category": category,
        "title": title,
        "description": description,
        "tools": list(tools),
        "materials": list(materials),
        "estimated_time": minutes,
        "safety": list(safety),
    }


def preparation_steps() -> List[Dict]:
    return [
        _step(
            "preparation", "Site Survey and Preparation",
            "Assess installation location, verify power availability, and prepare workspace.",
            ["Measuring tape", "Stud finder", "Level", "Voltage tester"], [], 30,
            [
                "Turn off power at breaker before any electrical work",
                "Verify circuits with voltage tester",
                "Ensure adequate lighting in work area",
            ],
        ),
        _step(
            "preparation", "Rack Installation", "Mount equipment rack and verify stability.",
            ["Drill", "Level", "Socket wrench set", "Anchors"],
            ["Equipment rack", "Mounting hardware", "Cable management"], 60,
            [
                "Use proper lifting techniques - get assistance for heavy racks",
                "Ensure rack is level and securely mounted",
                "Verify weight capacity before loading equipment",
            ],
        ),
    ]


def rack_mounting_steps(rack_config: RackConfiguration) -> List[Dict]:
    return [
        _step(
            "mounting", f"Install {slot.device.name}",
            f"Mount {slot.device.name} in rack position {slot.position}U.",
            ["Rack screws", "Screwdriver", "Cable ties"],
            [slot.device.name, "Rack mounting ears", "Power cable"], 15,
            [
                "Ensure device is powered off during installation",
                "Support device weight while securing",
                "Check that cooling vents are not obstructed",
            ],
        )
        for slot in rack_config.devices
    ]


def wiring_steps() -> List[Dict]:
    return [
        _step(
            "wiring", "Power Distribution", "Connect all devices to UPS and verify power distribution.",
            ["Wire strippers", "Label maker", "Voltage tester"],
            ["Power cables", "Power strips", "Cable labels"], 45,
            [
                "Turn off UPS before connecting devices",
                "Verify voltage compatibility",
                "Do not exceed UPS capacity",
                "Label all power connections",
            ],
        ),
        _step(
            "wiring", "Network Cabling", "Connect all network devices and run cables to device locations.",
            ["Cable tester", "Crimping tool", "Fish tape"],
            ["Ethernet cables", "RJ45 connectors", "Cable conduit"], 120,
            [
                "Test all cables before permanent installation",
                "Maintain proper bend radius for cables",
                "Secure cables to prevent damage",
                "Label all network connections",
            ],
        ),
    ]


def device_installation_steps(devices: Sequence[CalculatedDevice]) -> List[Dict]:
    """Mounting steps for device types with a dedicated procedure.

    Devices are matched by name: cameras, doorbells, thermostats and smoke
    detectors. Anything else is covered by the pairing step.
    """
    steps = []
    for device in devices:
        name = device.device_name.lower()
        if device.quantity <= 0:
            continue
        if "camera" in name:
            steps.append(_step(
                "mounting", f"Install {device.device_name}s ({device.quantity} units)",
                "Mount cameras at optimal viewing angles and heights.",
                ["Drill", "Level", "Fish tape", "Voltage tester"],
                ["Camera mounts", "Screws", "Ethernet cables", "Weatherproofing"],
                45 * device.quantity,
                [
                    "Use ladder safety procedures",
                    "Ensure stable mounting surface",
                    "Protect cables from weather exposure",
                    "Test viewing angles before final mounting",
                ],
            ))
        elif "doorbell" in name:
            steps.append(_step(
                "mounting", f"Install {device.device_name}",
                "Replace existing doorbell with smart doorbell system.",
                ["Screwdriver", "Wire strippers", "Voltage tester"],
                ["Doorbell transformer", "Mounting screws", "Wire nuts"], 30 * device.quantity,
                [
                    "Turn off power to doorbell circuit",
                    "Verify voltage compatibility (typically 16-24VAC)",
                    "Ensure transformer capacity is adequate",
                    "Test installation before closing up walls",
                ],
            ))
        elif "thermostat" in name:
            steps.append(_step(
                "mounting", f"Install {device.device_name}",
                "Replace existing thermostat with smart control unit.",
                ["Screwdriver", "Wire labels", "Level"],
                ["Wall plate", "Wire nuts", "C-wire adapter if needed"], 45 * device.quantity,
                [
                    "Turn off HVAC system power",
                    "Label all wires before disconnection",
                    "Verify HVAC compatibility",
                    "Test system operation after installation",
                ],
            ))
        elif "smoke" in name:
            steps.append(_step(
                "mounting", f"Install {device.device_name}s ({device.quantity} units)",
                "Mount smart smoke detectors in optimal locations.",
                ["Drill", "Stud finder", "Level"],
                ["Mounting brackets", "Screws", "Batteries"], 20 * device.quantity,
                [
                    "Follow local fire code requirements",
                    "Test detection sensitivity",
                    "Ensure proper spacing from walls and corners",
                    "Verify interconnection with existing fire safety systems",
                ],
            ))
    return steps


def configuration_steps() -> List[Dict]:
    return [
        _step(
            "configuration", "Network Configuration", "Configure router, switches, and network settings.",
            ["Laptop", "Ethernet cable"], ["Configuration documentation"], 60,
            [
                "Document all configuration changes",
                "Create backup of settings",
                "Test connectivity at each step",
            ],
        ),
        _step(
            "configuration", "Device Pairing and Setup",
            "Add all smart devices to the home automation system.",
            ["Smartphone", "Tablet"], ["Device manuals", "Account credentials"], 90,
            [
                "Use strong, unique passwords",
                "Enable two-factor authentication",
                "Keep firmware updated",
            ],
        ),
    ]


def testing_steps() -> List[Dict]:
    return [
        _step(
            "testing", "System Testing", "Verify all devices are functioning and communicating properly.",
            ["Network scanner", "Testing checklist"], [], 45,
            [
                "Test all safety devices (smoke detectors, security)",
                "Verify backup power systems",
                "Document any issues found",
            ],
        ),
        _step(
            "testing", "User Training and Documentation", "Train users and provide system documentation.",
            ["User manuals", "Quick reference guides"], ["System passwords", "Emergency contacts"], 30,
            [
                "Provide emergency procedures",
                "Review system capabilities and limitations",
                "Schedule follow-up support",
            ],
        ),
    ]


def get_difficulty_level(device_count: int, tier_id: str) -> str:
    if tier_id == "advanced" or device_count > 20:
        return "advanced"
    if tier_id == "intermediate" or device_count > 10:
        return "intermediate"
    return "beginner"


def generate_troubleshooting(devices: Sequence[CalculatedDevice]) -> List[TroubleshootingEntry]:
    entries = list(GENERAL_TROUBLESHOOTING)
    if any("camera" in device.device_name.lower() for device in devices):
        entries.append(CAMERA_TROUBLESHOOTING)
    return entries


def generate_installation_guide(
    devices: Sequence[CalculatedDevice],
    rack_config: RackConfiguration,
    tier_id: str,
) -> InstallationGuide:
    """Build an ordered installation guide for a project.

    Steps run preparation, rack mounting, wiring, device mounting,
    configuration and testing, numbered ``step_1``, ``step_2``, ...

    Args:
        devices: Calculated devices with quantities
        rack_config: Rack layout whose devices each get a mounting step
        tier_id: Automation tier id

    Returns:
        InstallationGuide
    """
    raw_steps = (
        preparation_steps()
        + rack_mounting_steps(rack_config)
        + wiring_steps()
        + device_installation_steps(devices)
        + configuration_steps()
        + testing_steps()
    )
    steps = [
        InstallationStep(id=f"step_{number}", **step)
        for number, step in enumerate(raw_steps, start=1)
    ]

    required_tools: List[str] = []
    for step in steps:
        for tool in step.tools:
            if tool not in required_tools:
                required_tools.append(tool)

    return InstallationGuide(
        project_name=f"{tier_id.capitalize()} Home Automation Installation",
        total_time=sum(step.estimated_time for step in steps),
        difficulty_level=get_difficulty_level(len(devices), tier_id),
        required_tools=required_tools,
        safety_requirements=list(SAFETY_REQUIREMENTS),
        steps=steps,
        troubleshooting=generate_troubleshooting(devices),
        warranty_info=list(WARRANTY_INFO),
    )
