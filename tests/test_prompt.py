import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fitcheck.analysis.prompt import (  # noqa: E402
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    PROMPT_TEXT_CAP,
    RESPONSE_KEYS,
    SCORING_CATEGORIES,
    SYSTEM_PROMPT,
    build_request,
    build_user_message,
)


class InstructionTests(unittest.TestCase):
    def test_category_weights_total_100(self):
        self.assertEqual(sum(points for _, points in SCORING_CATEGORIES), 100)
        self.assertEqual([points for _, points in SCORING_CATEGORIES], [40, 30, 15, 10, 5])

    def test_instructions_name_every_category_and_key(self):
        for name, points in SCORING_CATEGORIES:
            self.assertIn(f"{name} (X/{points} points)", SYSTEM_PROMPT)
        for key in RESPONSE_KEYS:
            self.assertIn(f'"{key}"', SYSTEM_PROMPT)
        self.assertIn("**Total Score: X/100**", SYSTEM_PROMPT)
        self.assertIn('"matchScore": number', SYSTEM_PROMPT)


class UserMessageTests(unittest.TestCase):
    def test_sections_in_order(self):
        message = build_user_message("JOB BODY", "RESUME BODY")
        job_at = message.index("=== JOB POSTING ===")
        resume_at = message.index("=== RESUME ===")
        self.assertLess(job_at, message.index("JOB BODY"))
        self.assertLess(message.index("JOB BODY"), resume_at)
        self.assertLess(resume_at, message.index("RESUME BODY"))

    def test_each_text_truncated_to_cap(self):
        job = "J" * (PROMPT_TEXT_CAP + 1500)
        resume = "R" * (PROMPT_TEXT_CAP + 20)
        message = build_user_message(job, resume)
        self.assertIn("J" * PROMPT_TEXT_CAP, message)
        self.assertNotIn("J" * (PROMPT_TEXT_CAP + 1), message)
        self.assertNotIn("R" * (PROMPT_TEXT_CAP + 1), message)
        self.assertIn("R" * PROMPT_TEXT_CAP, message)

    def test_short_texts_kept_whole(self):
        message = build_user_message("Python, AWS", "Built pipelines on AWS")
        self.assertIn("Python, AWS\n", message)
        self.assertIn("Built pipelines on AWS\n", message)


class CompletionRequestTests(unittest.TestCase):
    def test_defaults(self):
        request = build_request("job", "resume")
        self.assertEqual(request.max_tokens, DEFAULT_MAX_TOKENS)
        self.assertEqual(request.temperature, DEFAULT_TEMPERATURE)
        self.assertEqual(request.instructions, SYSTEM_PROMPT)

    def test_messages_are_system_then_user(self):
        request = build_request("job", "resume", max_tokens=100, temperature=0.0)
        messages = request.messages()
        self.assertEqual([m.role for m in messages], ["system", "user"])
        self.assertEqual(messages[1].content, request.user_message)
        self.assertEqual(request.max_tokens, 100)

    def test_none_inputs_treated_as_empty(self):
        request = build_request(None, None)
        self.assertIn("=== RESUME ===", request.user_message)


if __name__ == "__main__":
    unittest.main()
