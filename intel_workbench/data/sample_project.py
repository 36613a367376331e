import copy
from typing import Any, Dict
from intel_workbench.reports.models import Project

SAMPLE_PROJECT_ID = "proj-sandworm"
SAMPLE_TIMESTAMP = "2024-01-15T00:00:00.000Z"

_HYPOTHESES = [
    {
        "id": "h1-gru",
        "name": "Russian GRU Unit 74455",
        "description": "Attribution to Sandworm Team, a cyber unit within the Russian GRU (Main Intelligence "
                       "Directorate), specifically Unit 74455 based in Moscow.",
    },
    {
        "id": "h2-apt41",
        "name": "Chinese APT41 false flag",
        "description": "Operations conducted by Chinese state-sponsored APT41 (Double Dragon) with deliberate "
                       "false flags to implicate Russia.",
    },
    {
        "id": "h3-criminal",
        "name": "Criminal group (not state)",
        "description": "Activity conducted by a sophisticated financially-motivated criminal group without "
                       "direct state sponsorship.",
    },
    {
        "id": "h4-unknown",
        "name": "Unknown state actor",
        "description": "Operations by an unidentified state-level actor with unknown motivations, possibly a "
                       "third party benefiting from chaos.",
    },
]

_EVIDENCE = [
    {
        "id": "e1-notpetya",
        "description": "NotPetya destructive wiper disguised as ransomware, targeting Ukrainian financial software "
                       "(M.E.Doc) and spreading globally. Caused $10B+ in damages (2017).",
        "source": "ESET, Microsoft, US-CERT",
        "credibility": "High",
        "relevance": "High",
    },
    {
        "id": "e2-olympic",
        "description": "Olympic Destroyer malware deployed during PyeongChang 2018 Winter Olympics opening "
                       "ceremony, disrupting IT infrastructure.",
        "source": "Kaspersky, Cisco Talos",
        "credibility": "Medium",
        "relevance": "High",
    },
    {
        "id": "e3-vpnfilter",
        "description": "VPNFilter modular IoT botnet infecting 500K+ network devices across 54 countries, with "
                       "destructive capabilities.",
        "source": "Cisco Talos, FBI",
        "credibility": "High",
        "relevance": "High",
    },
    {
        "id": "e4-indictment",
        "description": "US DOJ indictment (Oct 2020) naming six GRU officers of Unit 74455 for NotPetya, Olympic "
                       "Destroyer, and other attacks.",
        "source": "US Department of Justice",
        "credibility": "High",
        "relevance": "High",
    },
    {
        "id": "e5-blackenergy",
        "description": "Significant code overlap and TTP similarities with BlackEnergy malware used in 2015-2016 "
                       "Ukraine power grid attacks.",
        "source": "ESET, iSIGHT Partners",
        "credibility": "Medium",
        "relevance": "High",
    },
    {
        "id": "e6-geopolitical",
        "description": "Targeting patterns consistently aligned with Russian geopolitical interests: Ukraine, NATO "
                       "allies, anti-doping agencies, OPCW.",
        "source": "Multiple OSINT, CrowdStrike",
        "credibility": "Medium",
        "relevance": "Medium",
    },
    {
        "id": "e7-falseflags",
        "description": "Deliberate false flags planted in Olympic Destroyer: code snippets mimicking Lazarus Group "
                       "(DPRK) and APT3 (China) tooling.",
        "source": "Kaspersky GReAT",
        "credibility": "Low",
        "relevance": "Medium",
    },
    {
        "id": "e8-commodity",
        "description": "Use of commodity RATs (e.g., X-Agent variants) and publicly available tools also observed "
                       "in criminal campaigns.",
        "source": "FireEye, Recorded Future",
        "credibility": "Medium",
        "relevance": "Low",
    },
]

_RATINGS = {
    "e1-notpetya": {"h1-gru": "C", "h2-apt41": "I", "h3-criminal": "I", "h4-unknown": "N"},
    "e2-olympic": {"h1-gru": "C", "h2-apt41": "N", "h3-criminal": "I", "h4-unknown": "N"},
    "e3-vpnfilter": {"h1-gru": "C", "h2-apt41": "I", "h3-criminal": "N", "h4-unknown": "N"},
    "e4-indictment": {"h1-gru": "C", "h2-apt41": "I", "h3-criminal": "I", "h4-unknown": "I"},
    "e5-blackenergy": {"h1-gru": "C", "h2-apt41": "I", "h3-criminal": "I", "h4-unknown": "N"},
    "e6-geopolitical": {"h1-gru": "C", "h2-apt41": "N", "h3-criminal": "I", "h4-unknown": "N"},
    "e7-falseflags": {"h1-gru": "C", "h2-apt41": "C", "h3-criminal": "I", "h4-unknown": "N"},
    "e8-commodity": {"h1-gru": "N", "h2-apt41": "N", "h3-criminal": "C", "h4-unknown": "N"},
}

SAMPLE_PROJECT_DOCUMENT: Dict[str, Any] = {
    "id": SAMPLE_PROJECT_ID,
    "name": "Sandworm / Voodoo Bear: APT Attribution",
    "description": "Structured analysis of competing hypotheses for attribution of the Sandworm threat actor "
                   "cluster, responsible for NotPetya, Olympic Destroyer, VPNFilter, and attacks on Ukrainian "
                   "critical infrastructure.",
    "achMatrices": [
        {
            "id": "ach-sandworm",
            "name": "Sandworm APT Attribution Analysis",
            "hypotheses": _HYPOTHESES,
            "evidence": _EVIDENCE,
            "ratings": _RATINGS,
            "createdAt": SAMPLE_TIMESTAMP,
            "updatedAt": SAMPLE_TIMESTAMP,
        }
    ],
    "biasChecklists": [],
    "createdAt": SAMPLE_TIMESTAMP,
    "updatedAt": SAMPLE_TIMESTAMP,
}


def build_sample_project() -> Project:
    """A fresh copy of the bundled Sandworm attribution project."""
    return Project.from_dict(copy.deepcopy(SAMPLE_PROJECT_DOCUMENT))
