from __future__ import annotations

from dataclasses import dataclass

from fitcheck.ai.types import ChatMessage

PROMPT_TEXT_CAP = 8000
DEFAULT_MAX_TOKENS = 2500
DEFAULT_TEMPERATURE = 0.1

SCORING_CATEGORIES = (
    ("Technical Skills Match", 40),
    ("Experience Relevance", 30),
    ("Industry/Domain Knowledge", 15),
    ("Educational Background", 10),
    ("Soft Skills/Culture Fit", 5),
)

RESPONSE_KEYS = ("fitLevel", "recommendation", "matchScore", "explanation", "improvements")

_CATEGORY_GUIDANCE = {
    "Technical Skills Match": (
        "- Job Requirements: [Quote exact skills/technologies from the job posting]\n"
        "- Resume Skills: [Quote exact skills/technologies from the resume]\n"
        "- Skill Matches: [List specific overlapping skills]\n"
        "- Missing Skills: [List specific missing skills]\n"
        "- Assessment: [Detailed evaluation]"
    ),
    "Experience Relevance": (
        "- Required Experience: [Quote experience requirements from the job]\n"
        "- Candidate Experience: [List specific job titles, companies and durations from the resume]\n"
        "- Project Alignment: [Mention specific projects/achievements]\n"
        "- Experience Assessment: [Detailed evaluation]"
    ),
    "Industry/Domain Knowledge": (
        "- Required Domain: [Quote industry/domain requirements]\n"
        "- Candidate Background: [Assess relevant industry experience]\n"
        "- Knowledge Assessment: [Detailed evaluation]"
    ),
    "Educational Background": (
        "- Required Education: [Quote education requirements from the job]\n"
        "- Candidate Education: [University, degree, GPA, relevant coursework from the resume]\n"
        "- Educational Assessment: [Detailed evaluation highlighting strengths]"
    ),
    "Soft Skills/Culture Fit": (
        "- Evidence Found: [Quote specific examples from the resume]\n"
        "- Assessment: [Detailed evaluation]"
    ),
}


def _category_sections() -> str:
    sections = []
    for index, (name, points) in enumerate(SCORING_CATEGORIES, start=1):
        sections.append(f"**{index}. {name} (X/{points} points):**\n{_CATEGORY_GUIDANCE[name]}")
    return "\n\n".join(sections)


def build_instructions() -> str:
    total = sum(points for _, points in SCORING_CATEGORIES)
    keys = ",\n".join(
        f'  "{key}": {"number" if key == "matchScore" else "string"}' for key in RESPONSE_KEYS
    )
    return (
        "You are an expert job fit analyzer. You MUST provide a comprehensive analysis "
        "following the EXACT structure below.\n\n"
        f"YOUR EXPLANATION FIELD MUST INCLUDE ALL {len(SCORING_CATEGORIES)} SECTIONS "
        "WITH DETAILED BREAKDOWNS:\n\n"
        f"{_category_sections()}\n\n"
        f"**Total Score: X/{total}** (must equal the sum of all categories)\n\n"
        f"If you do not include ALL {len(SCORING_CATEGORIES)} sections with detailed "
        "breakdowns, your response is incomplete.\n\n"
        "Respond with a single valid JSON object and nothing else:\n"
        f"{{\n{keys}\n}}"
    )


SYSTEM_PROMPT = build_instructions()


def build_user_message(job_text: str, resume_text: str) -> str:
    return (
        f"MANDATORY: Your explanation must include ALL {len(SCORING_CATEGORIES)} detailed sections "
        "as specified in the system prompt. Do not provide a summary - provide the complete breakdown.\n\n"
        "=== JOB POSTING ===\n"
        f"{job_text[:PROMPT_TEXT_CAP]}\n\n"
        "=== RESUME ===\n"
        f"{resume_text[:PROMPT_TEXT_CAP]}\n\n"
        "REQUIRED OUTPUT:\n"
        "1. Complete Technical Skills Match section with quotes and assessment\n"
        "2. Complete Experience Relevance section with specific roles and companies\n"
        "3. Complete Industry/Domain Knowledge section\n"
        "4. Complete Educational Background section with university, degree, GPA, coursework\n"
        "5. Complete Soft Skills/Culture Fit section with evidence\n"
        "6. Total score calculation showing all category breakdowns\n"
        "7. Specific improvement recommendations\n\n"
        f"Your explanation field MUST be comprehensive and follow the exact "
        f"{len(SCORING_CATEGORIES)}-section format specified."
    )


@dataclass(frozen=True)
class CompletionRequest:
    instructions: str
    user_message: str
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE

    def messages(self) -> list[ChatMessage]:
        return [
            ChatMessage(role="system", content=self.instructions),
            ChatMessage(role="user", content=self.user_message),
        ]


def build_request(
    job_text: str,
    resume_text: str,
    *,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    temperature: float = DEFAULT_TEMPERATURE,
) -> CompletionRequest:
    return CompletionRequest(
        instructions=SYSTEM_PROMPT,
        user_message=build_user_message(job_text or "", resume_text or ""),
        max_tokens=max_tokens,
        temperature=temperature,
    )
