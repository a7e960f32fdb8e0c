"""Sample mission description used by the CLI demo and the tests."""

SAMPLE_MISSION_TEXT = """\
MISSION OBJECTIVE
Deliver a 450 kg robotic lander and two science payloads to the lunar south
polar region to survey water ice deposits for future crewed missions.

VEHICLE DESCRIPTION
Two-stage, partially reusable medium-lift launch vehicle with a liquid-fueled
first stage that returns for propulsive landing and an expendable upper stage
carrying the lander inside a 5 m composite fairing.

LAUNCH SEQUENCE
Liftoff from the pad, max-Q at T+70 s, first stage separation at T+160 s,
upper stage burn to parking orbit and trans-lunar injection at T+48 min.

TECHNICAL SUMMARY
Nine methane/LOX engines on the first stage producing 7,600 kN of thrust at sea
level, one vacuum-optimized engine on the upper stage, carbon composite tanks and
a triple-redundant flight computer with autonomous flight termination.

DIMENSIONS, MASS & STAGES
Height 62 m, diameter 4.2 m, gross liftoff mass 520,000 kg across two stages.

SAFETY CONSIDERATIONS
Autonomous flight safety system, range safety coordination with the Eastern
Range and hazard area notices issued 72 hours before launch.

GROUND OPERATIONS
Horizontal integration in the hangar, rollout 24 hours before launch, propellant
loading begins at T-45 min under remote control.

LAUNCH SITE
Kennedy Space Center, Launch Complex 39A, Florida

SITE NAMES & COORDINATES
LC-39A, 28.6082° N, 80.6041° W

RISK ASSESSMENT
Preliminary debris and expected casualty analysis shows Ec below 1e-4 for all
phases of flight, with the highest hazard during first stage return.

PUBLIC SAFETY
Overflight of populated coastal areas is avoided by a 90 degree launch azimuth
and maritime exclusion zones.

INTENDED WINDOW
Q3 2026, with a 10-day launch period opening in August 2026.

APPLICATION TIMELINE
Pre-application consultation in Q4 2025 and full license application submitted
by January 2026.

LICENSE TYPE
Vehicle operator license covering multiple missions from the same site.
"""

# Same mission as plain prose, with no section headers.
SAMPLE_MISSION_PROSE = """\
We are planning a lunar lander mission that will deliver a 450 kg robotic lander to the Moon's south pole.
The two-stage vehicle stands 62 m tall and its first stage burns liquid methane and LOX before a propulsive landing on a droneship.
Launch will take place from Kennedy Space Center, with the first attempt targeted for Q3 2026.
We have not yet decided between a vehicle operator license and a mission-specific license.
Airspace closures and maritime exclusion zones will be coordinated with the Eastern Range.
"""
