#academy/models/enums.py
from __future__ import annotations
from enum import Enum


class RoleType(str, Enum):
    FDE = "FDE"
    AI_SE = "AI-SE"
    AI_PM = "AI-PM"
    AI_DA = "AI-DA"
    AI_DS = "AI-DS"
    AI_SEC = "AI-SEC"
    AI_FE = "AI-FE"


ROLE_DESCRIPTIONS = {
    RoleType.FDE: "Forward Deployed Engineer",
    RoleType.AI_SE: "AI Software Engineer",
    RoleType.AI_PM: "AI Product Manager",
    RoleType.AI_DA: "AI Data Analyst",
    RoleType.AI_DS: "AI Data Scientist",
    RoleType.AI_SEC: "AI Security Consultant",
    RoleType.AI_FE: "AI Front-End Developer",
}


class TeamType(str, Enum):
    ALPHA = "Alpha"
    BETA = "Beta"
    GAMMA = "Gamma"
    DELTA = "Delta"
    EPSILON = "Epsilon"
    ZETA = "Zeta"
    ETA = "Eta"
    THETA = "Theta"


class StreamType(str, Enum):
    TECH = "Tech"
    BUSINESS = "Business"


class ParticipantStatus(str, Enum):
    # registration no longer has a manual approval step
    approved = "approved"


class ClearanceLevel(str, Enum):
    # lowest tier first
    RECRUIT = "RECRUIT"
    OPERATIVE = "OPERATIVE"
    SPECIALIST = "SPECIALIST"
    AGENT = "AGENT"
    ARCHITECT = "ARCHITECT"
