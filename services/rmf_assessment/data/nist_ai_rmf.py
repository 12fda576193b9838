"""
NIST AI RMF 1.0 Questionnaire Catalog
=====================================

Seed data for the risk template store. One entry per subcategory; outcomes
follow the wording of NIST AI 100-1.
"""

from typing import Any


def _maturity(qid: str, text: str, required: bool = True) -> dict[str, Any]:
    return {
        "id": qid,
        "text": text,
        "type": "scale",
        "options": ["1", "2", "3", "4", "5"],
        "required": required,
        "helpText": "1 = not in place, 5 = fully in place and reviewed",
    }


def _yes_no(qid: str, text: str, required: bool = True, weight: int = 5) -> dict[str, Any]:
    return {
        "id": qid,
        "text": text,
        "type": "yes-no",
        "options": ["yes", "no"],
        "required": required,
        "weight": weight,
    }


def _evidence(qid: str, text: str) -> dict[str, Any]:
    return {"id": qid, "text": text, "type": "file-upload", "required": False, "weight": 3}


NIST_AI_RMF_TEMPLATES: list[dict[str, Any]] = [
    # -------------------------------------------------------------------------
    # GOVERN
    # -------------------------------------------------------------------------
    {
        "frameworkFunction": "govern",
        "category": "GOVERN 1",
        "subcategoryId": "GV-1.1",
        "outcome": (
            "Legal and regulatory requirements involving AI are understood, "
            "managed, and documented."
        ),
        "informativeReferences": ["NIST AI 100-1 GOVERN 1.1"],
        "questions": [
            _yes_no("GV-1.1-Q1", "Is there an inventory of laws and regulations applicable to the AI system?"),
            _maturity("GV-1.1-Q2", "How mature is the process for tracking regulatory change?"),
            _evidence("GV-1.1-Q3", "Upload the regulatory requirements register."),
        ],
        "riskFactors": [{"factor": "Regulatory non-compliance", "impact": "high", "likelihood": "medium"}],
        "mitigationStrategies": ["Maintain a legal requirements register reviewed by counsel"],
        "evidenceRequirements": [
            {"type": "register", "description": "Regulatory requirements register", "mandatory": True}
        ],
    },
    {
        "frameworkFunction": "govern",
        "category": "GOVERN 1",
        "subcategoryId": "GV-1.2",
        "outcome": (
            "The characteristics of trustworthy AI are integrated into "
            "organizational policies, processes, procedures, and practices."
        ),
        "informativeReferences": ["NIST AI 100-1 GOVERN 1.2"],
        "questions": [
            _yes_no("GV-1.2-Q1", "Do organizational policies reference trustworthy AI characteristics?"),
            _maturity("GV-1.2-Q2", "To what extent are those policies applied in day-to-day practice?"),
        ],
        "mitigationStrategies": ["Adopt an AI policy mapped to trustworthiness characteristics"],
    },
    {
        "frameworkFunction": "govern",
        "category": "GOVERN 2",
        "subcategoryId": "GV-2.1",
        "outcome": (
            "Roles and responsibilities and lines of communication related to "
            "mapping, measuring, and managing AI risks are documented and clear."
        ),
        "informativeReferences": ["NIST AI 100-1 GOVERN 2.1"],
        "questions": [
            _yes_no("GV-2.1-Q1", "Is there a documented RACI for AI risk management?"),
            _maturity("GV-2.1-Q2", "How well understood are these roles across teams?"),
        ],
    },
    {
        "frameworkFunction": "govern",
        "category": "GOVERN 4",
        "subcategoryId": "GV-4.1",
        "outcome": (
            "Organizational policies and practices are in place to foster a "
            "critical thinking and safety-first mindset in the design, "
            "development, deployment, and uses of AI systems."
        ),
        "informativeReferences": ["NIST AI 100-1 GOVERN 4.1"],
        "questions": [
            _yes_no("GV-4.1-Q1", "Are staff trained on AI safety and risk awareness?"),
            {
                "id": "GV-4.1-Q2",
                "text": "Describe how safety concerns can be escalated.",
                "type": "text",
                "required": False,
                "weight": 2,
            },
        ],
    },
    # -------------------------------------------------------------------------
    # MAP
    # -------------------------------------------------------------------------
    {
        "frameworkFunction": "map",
        "category": "MAP 1",
        "subcategoryId": "MP-1.1",
        "outcome": (
            "Intended purposes, potentially beneficial uses, context-specific "
            "laws, norms and expectations, and prospective settings in which "
            "the AI system will be deployed are understood and documented."
        ),
        "informativeReferences": ["NIST AI 100-1 MAP 1.1"],
        "questions": [
            _yes_no("MP-1.1-Q1", "Is the intended purpose of the AI system documented?"),
            _maturity("MP-1.1-Q2", "How completely are deployment settings and users described?"),
            _evidence("MP-1.1-Q3", "Upload the system context document."),
        ],
        "riskFactors": [{"factor": "Use outside intended context", "impact": "high", "likelihood": "medium"}],
    },
    {
        "frameworkFunction": "map",
        "category": "MAP 2",
        "subcategoryId": "MP-2.1",
        "outcome": (
            "The specific tasks and methods used to implement the tasks that "
            "the AI system will support are defined."
        ),
        "informativeReferences": ["NIST AI 100-1 MAP 2.1"],
        "questions": [
            _yes_no("MP-2.1-Q1", "Are the tasks supported by the system defined?"),
            {
                "id": "MP-2.1-Q2",
                "text": "Which learning approach does the system use?",
                "type": "multiple-choice",
                "options": ["supervised", "unsupervised", "reinforcement", "generative", "rule-based"],
                "required": True,
            },
        ],
    },
    {
        "frameworkFunction": "map",
        "category": "MAP 3",
        "subcategoryId": "MP-3.1",
        "outcome": (
            "Potential benefits of intended AI system functionality and "
            "performance are examined and documented."
        ),
        "informativeReferences": ["NIST AI 100-1 MAP 3.1"],
        "questions": [
            _yes_no("MP-3.1-Q1", "Have expected benefits been documented?"),
            _maturity("MP-3.1-Q2", "How rigorously were benefits weighed against risks?"),
        ],
    },
    {
        "frameworkFunction": "map",
        "category": "MAP 5",
        "subcategoryId": "MP-5.1",
        "outcome": (
            "Likelihood and magnitude of each identified impact based on "
            "expected use, past uses of AI systems in similar contexts, public "
            "incident reports, feedback from those external to the team that "
            "developed or deployed the AI system, or other data are identified "
            "and documented."
        ),
        "informativeReferences": ["NIST AI 100-1 MAP 5.1"],
        "questions": [
            _yes_no("MP-5.1-Q1", "Is there an impact assessment for the system?"),
            _maturity("MP-5.1-Q2", "How thoroughly are likelihood and magnitude estimated?"),
        ],
    },
    # -------------------------------------------------------------------------
    # MEASURE
    # -------------------------------------------------------------------------
    {
        "frameworkFunction": "measure",
        "category": "MEASURE 1",
        "subcategoryId": "MS-1.1",
        "outcome": (
            "Approaches and metrics for measurement of AI risks enumerated "
            "during the MAP function are selected for implementation."
        ),
        "informativeReferences": ["NIST AI 100-1 MEASURE 1.1"],
        "questions": [
            _yes_no("MS-1.1-Q1", "Are metrics defined for each mapped risk?"),
            _maturity("MS-1.1-Q2", "How consistently are metrics collected?"),
        ],
    },
    {
        "frameworkFunction": "measure",
        "category": "MEASURE 2",
        "subcategoryId": "MS-2.5",
        "outcome": (
            "The AI system to be deployed is demonstrated to be valid and "
            "reliable. Limitations of the generalizability beyond the "
            "conditions under which the technology was developed are documented."
        ),
        "informativeReferences": ["NIST AI 100-1 MEASURE 2.5"],
        "questions": [
            _yes_no("MS-2.5-Q1", "Has the system been validated on representative data?"),
            _maturity("MS-2.5-Q2", "How well are generalization limits documented?"),
            _evidence("MS-2.5-Q3", "Upload validation results."),
        ],
        "evidenceRequirements": [
            {"type": "test-report", "description": "Validation test report", "mandatory": True}
        ],
    },
    {
        "frameworkFunction": "measure",
        "category": "MEASURE 2",
        "subcategoryId": "MS-2.11",
        "outcome": "Fairness and bias, as identified in the MAP function, are evaluated and results are documented.",
        "informativeReferences": ["NIST AI 100-1 MEASURE 2.11"],
        "questions": [
            _yes_no("MS-2.11-Q1", "Has a bias evaluation been performed?"),
            _maturity("MS-2.11-Q2", "How comprehensive is subgroup coverage in the evaluation?"),
        ],
        "riskFactors": [{"factor": "Harmful bias", "impact": "high", "likelihood": "high"}],
    },
    {
        "frameworkFunction": "measure",
        "category": "MEASURE 3",
        "subcategoryId": "MS-3.1",
        "outcome": (
            "Approaches, personnel, and documentation are in place to "
            "regularly identify and track existing, unanticipated, and "
            "emergent AI risks based on factors such as intended and actual "
            "performance in deployed contexts."
        ),
        "informativeReferences": ["NIST AI 100-1 MEASURE 3.1"],
        "questions": [
            _yes_no("MS-3.1-Q1", "Is production performance monitored?"),
            _maturity("MS-3.1-Q2", "How quickly are emergent risks detected?"),
        ],
    },
    # -------------------------------------------------------------------------
    # MANAGE
    # -------------------------------------------------------------------------
    {
        "frameworkFunction": "manage",
        "category": "MANAGE 1",
        "subcategoryId": "MG-1.1",
        "outcome": (
            "A determination is made as to whether the AI system achieves its "
            "intended purposes and stated objectives and whether its "
            "development or deployment should proceed."
        ),
        "informativeReferences": ["NIST AI 100-1 MANAGE 1.1"],
        "questions": [
            _yes_no("MG-1.1-Q1", "Is there a documented go/no-go decision for deployment?"),
            _maturity("MG-1.1-Q2", "How clearly are decision criteria defined?"),
        ],
    },
    {
        "frameworkFunction": "manage",
        "category": "MANAGE 1",
        "subcategoryId": "MG-1.3",
        "outcome": (
            "Responses to the AI risks deemed high priority, as identified by "
            "the MAP function, are developed, planned, and documented."
        ),
        "informativeReferences": ["NIST AI 100-1 MANAGE 1.3"],
        "questions": [
            _yes_no("MG-1.3-Q1", "Does each high-priority risk have a response plan?"),
            _maturity("MG-1.3-Q2", "How far along is execution of those plans?"),
        ],
    },
    {
        "frameworkFunction": "manage",
        "category": "MANAGE 2",
        "subcategoryId": "MG-2.4",
        "outcome": (
            "Mechanisms are in place and applied, and responsibilities are "
            "assigned and understood, to supersede, disengage, or deactivate "
            "AI systems that demonstrate performance or outcomes inconsistent "
            "with intended use."
        ),
        "informativeReferences": ["NIST AI 100-1 MANAGE 2.4"],
        "questions": [
            _yes_no("MG-2.4-Q1", "Can the system be disengaged or rolled back?"),
            _yes_no("MG-2.4-Q2", "Has the deactivation procedure been tested?", weight=8),
        ],
    },
    {
        "frameworkFunction": "manage",
        "category": "MANAGE 4",
        "subcategoryId": "MG-4.1",
        "outcome": (
            "Post-deployment AI system monitoring plans are implemented, "
            "including mechanisms for capturing and evaluating input from "
            "users and other relevant AI actors, appeal and override, "
            "decommissioning, incident response, recovery, and change management."
        ),
        "informativeReferences": ["NIST AI 100-1 MANAGE 4.1"],
        "questions": [
            _yes_no("MG-4.1-Q1", "Is there a post-deployment monitoring plan?"),
            _maturity("MG-4.1-Q2", "How mature is incident response for the AI system?"),
            _evidence("MG-4.1-Q3", "Upload the monitoring plan."),
        ],
    },
]
