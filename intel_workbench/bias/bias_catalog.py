from dataclasses import dataclass, replace
from typing import List, Tuple
from intel_workbench.reports.models import BiasChecklist, CognitiveBias
from intel_workbench.utils.id_utils import generate_id, now_iso


@dataclass(frozen=True)
class BiasDefinition:
    id: str
    name: str
    category: str          # Cognitive | Analytical | Social
    description: str
    default_mitigation: str


BIAS_CATEGORIES = ("Cognitive", "Analytical", "Social")

BIAS_DEFINITIONS: Tuple[BiasDefinition, ...] = (
    BiasDefinition(
        id="bias-anchoring",
        name="Anchoring",
        category="Cognitive",
        description="Over-relying on the first piece of information encountered",
        default_mitigation=(
            "Deliberately seek out multiple initial data points before forming judgments. "
            "Consider what conclusion you would reach if your first piece of evidence had been different."
        ),
    ),
    BiasDefinition(
        id="bias-confirmation",
        name="Confirmation Bias",
        category="Cognitive",
        description="Seeking/favoring info that confirms existing beliefs",
        default_mitigation=(
            "Actively seek disconfirming evidence. Assign a team member to play devil's advocate. "
            "Use ACH to force consideration of alternatives."
        ),
    ),
    BiasDefinition(
        id="bias-availability",
        name="Availability Heuristic",
        category="Cognitive",
        description="Judging likelihood by how easily examples come to mind",
        default_mitigation=(
            "Use base-rate data and statistical analysis rather than relying on memorable examples. "
            "Ask: \"Am I recalling this easily because it's common, or because it's vivid?\""
        ),
    ),
    BiasDefinition(
        id="bias-mirror-imaging",
        name="Mirror-Imaging",
        category="Analytical",
        description="Assuming adversaries think and act like we do",
        default_mitigation=(
            "Study the adversary's culture, doctrine, decision-making processes, and historical "
            "behavior patterns. Use Red Team analysis to model their perspective."
        ),
    ),
    BiasDefinition(
        id="bias-groupthink",
        name="Groupthink",
        category="Social",
        description="Conforming to group consensus without critical evaluation",
        default_mitigation=(
            "Encourage dissent and independent analysis before group discussion. Use anonymous "
            "polling for initial assessments. Rotate devil's advocate roles."
        ),
    ),
    BiasDefinition(
        id="bias-satisficing",
        name="Satisficing",
        category="Analytical",
        description="Accepting the first \"good enough\" explanation",
        default_mitigation=(
            "Require analysts to generate at least 3 alternative explanations before accepting any. "
            "Use a checklist to ensure all reasonable hypotheses have been considered."
        ),
    ),
    BiasDefinition(
        id="bias-premature-closure",
        name="Premature Closure",
        category="Analytical",
        description="Reaching a conclusion before all evidence is examined",
        default_mitigation=(
            "Establish a formal evidence review process. Track which evidence items have been "
            "evaluated against each hypothesis. Delay final conclusions until a predetermined "
            "evidence threshold is met."
        ),
    ),
    BiasDefinition(
        id="bias-vividness",
        name="Vividness Bias",
        category="Cognitive",
        description="Overweighting dramatic or memorable events",
        default_mitigation=(
            "Weight evidence by credibility and relevance scores, not emotional impact. Ask: "
            "\"Would I give this evidence the same weight if it were presented in dry, statistical terms?\""
        ),
    ),
    BiasDefinition(
        id="bias-hindsight",
        name="Hindsight Bias",
        category="Cognitive",
        description="\"I knew it all along\": overestimating prior predictability",
        default_mitigation=(
            "Document predictions and confidence levels BEFORE outcomes are known. Review past "
            "analyses to calibrate accuracy. Acknowledge uncertainty explicitly in assessments."
        ),
    ),
    BiasDefinition(
        id="bias-bandwagon",
        name="Bandwagon Effect",
        category="Social",
        description="Adopting views because others hold them",
        default_mitigation=(
            "Conduct independent analysis before reviewing peer assessments. Document your "
            "reasoning chain before consulting others. Track the source of each analytical judgment."
        ),
    ),
    BiasDefinition(
        id="bias-denial-of-change",
        name="Denial of Change",
        category="Analytical",
        description="Assuming patterns will continue unchanged",
        default_mitigation=(
            "Explicitly identify assumptions about continuity. Conduct \"What if?\" analysis for "
            "pattern breaks. Monitor leading indicators that could signal change."
        ),
    ),
    BiasDefinition(
        id="bias-proportionality",
        name="Proportionality Bias",
        category="Cognitive",
        description="Assuming big events must have big causes",
        default_mitigation=(
            "Consider simple explanations alongside complex ones. Review historical cases where "
            "small causes led to large effects (e.g., single misconfiguration causing major breach)."
        ),
    ),
)


def create_default_biases() -> List[CognitiveBias]:
    return [
        CognitiveBias(
            id=d.id,
            name=d.name,
            description=d.description,
            category=d.category,
            checked=False,
            mitigation_notes=d.default_mitigation,
        )
        for d in BIAS_DEFINITIONS
    ]


def create_checklist(name: str) -> BiasChecklist:
    now = now_iso()
    return BiasChecklist(id=generate_id(), name=name, biases=create_default_biases(),
                         created_at=now, updated_at=now)


def toggle_bias(checklist: BiasChecklist, bias_id: str) -> BiasChecklist:
    biases = [replace(b, checked=not b.checked) if b.id == bias_id else b for b in checklist.biases]
    return replace(checklist, biases=biases, updated_at=now_iso())


def set_mitigation_notes(checklist: BiasChecklist, bias_id: str, notes: str) -> BiasChecklist:
    biases = [replace(b, mitigation_notes=notes) if b.id == bias_id else b for b in checklist.biases]
    return replace(checklist, biases=biases, updated_at=now_iso())


def checklist_progress(checklist: BiasChecklist) -> Tuple[int, int]:
    """(reviewed, total) bias counts."""
    return sum(1 for b in checklist.biases if b.checked), len(checklist.biases)
