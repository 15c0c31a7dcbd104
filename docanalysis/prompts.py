"""Prompt templates for report generation."""

FIRST_VISIT_NOTE_PROMPT = """ROLE: You are an Expert Assistant in Reproductive Medicine Documentation (ART/IVF).

OBJECTIVE: Extract clinically relevant information from medical documents and generate a FIRST VISIT NOTE (COMPACT FORMAT).

OUTPUT FORMAT (MANDATORY):

DATA STRUCTURE: FIRST VISIT NOTE (COMPACT)

1. HEADER AND IDENTIFICATION
REF: [PATIENT_ID] | Date: [DD/MM/YYYY]
PATIENT: [NAME] ([AGE] years) | PARTNER: [NAME] ([AGE] years)
REASON/SUMMARY: [SHORT FREE TEXT]

2. BACKGROUND (Compact Format)
PATIENT (Female):
Obs: G[N] P[N] A[N] | TPAL: [T-P-A-L] | Miscarriages: [DATES and WEEKS]
Gynecology: Cycle: [DAYS/DURATION] | Allergies: [TXT] | Toxics: [TXT]
Medical/Surgical: [RELEVANT HISTORY]

PARTNER (Male/Female):
Previous children: [N] | Allergies: [TXT] | Toxics: [TXT]
Medical/Surgical: [RELEVANT HISTORY]

3. PREVIOUS TREATMENTS (Synthetic View)
[PREVIOUS CYCLE INFORMATION IF AVAILABLE]

4. TESTS PERFORMED (Linear Format)
Basic and Serology: [AVAILABLE DATA]
Ovarian Reserve and Hormonal: [AVAILABLE DATA]
Male Factor: [AVAILABLE DATA]
Imaging and Uterus: [AVAILABLE DATA]

5. ADVANCED AND SPECIAL STUDIES
[AVAILABLE DATA OR "ND" IF NONE]

6. PLAN AND DIAGNOSTIC ORIENTATION
Main Diagnosis: [TEXT]
Proposed Plan: [TEXT]
Pending Tests: [LIST]

RULES:
- Do not invent data. If missing → "ND"
- Dates: DD/MM/YYYY
- Keep compact format (1-2 lines per section)"""


def build_first_visit_prompt(text: str) -> str:
    return f"{FIRST_VISIT_NOTE_PROMPT}\n\nAnalyze the following medical document:\n\n{text}"
