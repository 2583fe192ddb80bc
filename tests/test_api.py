import json
import sys
import unittest
from io import BytesIO
from pathlib import Path

from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from career_copilot.ai.errors import ProviderError  # noqa: E402
from career_copilot.ai.factory import ProviderRouter  # noqa: E402
from career_copilot.api.deps import get_provider_router  # noqa: E402
from career_copilot.core.rate_limit import limiter  # noqa: E402
from career_copilot.main import app  # noqa: E402
from career_copilot.services.response_cache import ResponseCache  # noqa: E402

PROFILE = {
    "name": None,
    "currentRole": "Senior Software Engineer",
    "yearsOfExperience": 5,
    "techStack": ["React", "Node", "AWS"],
    "strengthAreas": ["Architecture", "Mentoring"],
    "industryBackground": "Technology",
}

CAREER_PATH = {
    "roleId": "path_001",
    "roleName": "Cloud Architect",
    "description": "Designs cloud platforms.",
    "marketDemandScore": 90,
    "industryAlignment": 85,
    "requiredSkills": ["AWS", "Terraform", "Kubernetes"],
    "effortLevel": "High",
    "rewardPotential": "High",
    "reasoning": "Already ships on AWS.",
}

SKILL_GAP_ANALYSIS = {
    "careerPathId": "path_001",
    "careerPathName": "Cloud Architect",
    "skillGaps": [
        {"skillName": "Terraform", "currentLevel": "Beginner", "requiredLevel": "Advanced", "importance": "High"}
    ],
    "overallGapSeverity": "High",
    "estimatedTimeToClose": "3-6 months",
    "summary": "Infrastructure as code is the main gap.",
}

RESUME_TEXT = (
    "Sam Lee\nSenior Software Engineer with 5 years of experience building web platforms.\n"
    "Skills: React, Node, AWS\nEducation: BS Computer Science"
)


class ScriptedClient:
    def __init__(self, *script):
        self.script = list(script)
        self.calls = 0

    async def complete(self, prompt, *, max_tokens, system=None, response_schema=None):
        self.calls += 1
        step = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(step, Exception):
            raise step
        return step


class ApiTestCase(unittest.TestCase):
    def setUp(self):
        limiter.reset()
        self._previous_cache = app.state.response_cache
        app.state.response_cache = ResponseCache(enabled=True)
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        app.state.response_cache = self._previous_cache
        limiter.reset()

    def use_client(self, fake):
        router = ProviderRouter({"gemini": fake, "deepseek": fake}, default_provider="gemini")
        app.dependency_overrides[get_provider_router] = lambda: router
        return router


class HealthAndMockTests(ApiTestCase):
    def test_health(self):
        response = self.client.get("/v1/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "healthy"})

    def test_mock_resume_reads_the_short_example(self):
        response = self.client.post(
            "/v1/resume/interpret?mock=true",
            json={"resumeText": "Senior Software Engineer, 5 years, React/Node/AWS"},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["data"]["currentRole"], "Senior Software Engineer")
        self.assertEqual(body["data"]["yearsOfExperience"], 5)
        self.assertEqual(body["data"]["techStack"], ["React", "Node", "AWS"])

    def test_mock_pipeline_end_to_end(self):
        paths = self.client.post(
            "/v1/career-paths/generate?mock=true",
            json={"resumeProfile": PROFILE, "numberOfPaths": 3},
        )
        self.assertEqual(paths.status_code, 200)
        minimal = paths.json()["data"]
        self.assertEqual(len(minimal), 3)
        self.assertNotIn("effortLevel", minimal[0])
        self.assertEqual(len({path["roleId"] for path in minimal}), 3)

        full = self.client.post(
            "/v1/career-paths/generate?mock=true",
            json={"resumeProfile": PROFILE, "numberOfPaths": 2, "variant": "full"},
        ).json()["data"]
        self.assertIn(full[0]["effortLevel"], ("Low", "Medium", "High"))

        details = self.client.post(
            "/v1/career-paths/details?mock=true",
            json={"resumeProfile": PROFILE, "pathBasic": {"roleId": "x1", "roleName": "Tech Lead"}},
        ).json()["data"]
        self.assertEqual(details["roleId"], "x1")

        analysis = self.client.post(
            "/v1/skill-gap/analyze?mock=true",
            json={"resumeProfile": PROFILE, "careerPath": CAREER_PATH},
        ).json()["data"]
        self.assertEqual(analysis["careerPathId"], "path_001")
        self.assertEqual(analysis["overallGapSeverity"], "High")
        self.assertEqual(analysis["skillGaps"][0]["importance"], "High")

        roadmap = self.client.post(
            "/v1/roadmap/generate?mock=true",
            json={"resumeProfile": PROFILE, "careerPath": CAREER_PATH, "skillGapAnalysis": analysis},
        ).json()["data"]
        self.assertEqual(roadmap["timelineMonths"], 14)
        self.assertEqual([phase["phaseNumber"] for phase in roadmap["phases"]], [1, 2, 3])

    def test_mock_mode_does_not_consume_quota(self):
        for _ in range(7):
            response = self.client.post("/v1/resume/interpret?mock=true", json={"resumeText": RESUME_TEXT})
            self.assertEqual(response.status_code, 200)


class ValidationTests(ApiTestCase):
    def test_negative_years_is_rejected_with_field_name(self):
        profile = dict(PROFILE, yearsOfExperience=-1)
        response = self.client.post("/v1/career-paths/generate", json={"resumeProfile": profile})
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertIn("resumeProfile.yearsOfExperience", body["error"])

    def test_out_of_range_counts_and_timelines(self):
        response = self.client.post(
            "/v1/career-paths/generate", json={"resumeProfile": PROFILE, "numberOfPaths": 11}
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("numberOfPaths", response.json()["error"])

        response = self.client.post(
            "/v1/roadmap/generate",
            json={
                "resumeProfile": PROFILE,
                "careerPath": CAREER_PATH,
                "skillGapAnalysis": SKILL_GAP_ANALYSIS,
                "timelineMonths": 30,
            },
        )
        self.assertEqual(response.status_code, 400)

    def test_invalid_ordinal_is_rejected(self):
        path = dict(CAREER_PATH, effortLevel="Very High")
        response = self.client.post("/v1/skill-gap/analyze", json={"resumeProfile": PROFILE, "careerPath": path})
        self.assertEqual(response.status_code, 400)
        self.assertIn("careerPath.effortLevel", response.json()["error"])

    def test_unknown_provider_header(self):
        self.use_client(ScriptedClient("{}"))
        response = self.client.post(
            "/v1/resume/interpret",
            json={"resumeText": RESUME_TEXT},
            headers={"X-AI-Provider": "claude"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("Unknown AI provider", response.json()["error"])

    def test_unknown_provider_in_body(self):
        response = self.client.post("/v1/resume/interpret", json={"resumeText": RESUME_TEXT, "aiProvider": "claude"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("aiProvider", response.json()["error"])


class GenerationApiTests(ApiTestCase):
    RESUME_REPLY = json.dumps(
        {
            "name": "Sam Lee",
            "currentRole": "Senior Software Engineer",
            "yearsOfExperience": 5,
            "techStack": ["React", "Node", "AWS"],
            "strengthAreas": ["Web platforms"],
            "industryBackground": "Technology",
        }
    )

    def test_live_resume_uses_cache(self):
        fake = ScriptedClient(self.RESUME_REPLY)
        self.use_client(fake)
        first = self.client.post("/v1/resume/interpret", json={"resumeText": RESUME_TEXT})
        second = self.client.post("/v1/resume/interpret", json={"resumeText": RESUME_TEXT})
        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.json(), second.json())
        self.assertEqual(first.json()["data"]["name"], "Sam Lee")
        self.assertEqual(fake.calls, 1)

    def test_sixth_generation_request_is_rate_limited(self):
        self.use_client(ScriptedClient(self.RESUME_REPLY))
        for _ in range(5):
            response = self.client.post("/v1/resume/interpret", json={"resumeText": RESUME_TEXT})
            self.assertEqual(response.status_code, 200)
        response = self.client.post("/v1/resume/interpret", json={"resumeText": RESUME_TEXT})
        self.assertEqual(response.status_code, 429)
        body = response.json()
        self.assertEqual(body["code"], "rate_limited")
        self.assertIn("Daily limit reached (5 requests per 1 day)", body["error"])
        self.assertIn("Switch to Mock mode", body["error"])

    def test_forwarded_loopback_is_exempt(self):
        self.use_client(ScriptedClient(self.RESUME_REPLY))
        for _ in range(7):
            response = self.client.post(
                "/v1/resume/interpret",
                json={"resumeText": RESUME_TEXT},
                headers={"X-Forwarded-For": "127.0.0.1"},
            )
            self.assertEqual(response.status_code, 200)

    def test_provider_failure_maps_to_500(self):
        self.use_client(ScriptedClient(ProviderError("Failed to call Gemini API: timeout", provider="gemini")))
        response = self.client.post("/v1/resume/interpret", json={"resumeText": RESUME_TEXT})
        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertEqual(body, {"success": False, "error": "Failed to call Gemini API: timeout", "code": "provider_error"})

    def test_unusable_response_maps_to_500(self):
        self.use_client(ScriptedClient("Sorry, I can't do that."))
        response = self.client.post("/v1/resume/interpret", json={"resumeText": RESUME_TEXT})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["code"], "response_unusable")

    def test_live_skill_gap_recovers_truncated_output(self):
        truncated = (
            '{"careerPathId": "path_001", "careerPathName": "Cloud Architect", "overallGapSeverity": "Very High", '
            '"skillGaps": [{"skillName": "Terraform", "currentLevel": "Beginner", "requiredLevel": "Advanced", '
            '"importance": "High"}, {"skillName": "Kubern'
        )
        self.use_client(ScriptedClient(truncated))
        response = self.client.post(
            "/v1/skill-gap/analyze",
            json={"resumeProfile": PROFILE, "careerPath": CAREER_PATH},
            headers={"X-AI-Provider": "deepseek"},
        )
        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["overallGapSeverity"], "High")
        self.assertEqual([gap["skillName"] for gap in data["skillGaps"]], ["Terraform"])


class UploadTests(ApiTestCase):
    def test_txt_upload(self):
        response = self.client.post(
            "/v1/upload/parse-file",
            files={"file": ("resume.txt", BytesIO(("\ufeff" + RESUME_TEXT).encode("utf-8")), "text/plain")},
        )
        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["sourceType"], "txt")
        self.assertTrue(data["text"].startswith("Sam Lee"))
        self.assertEqual(data["characters"], len(data["text"]))
        self.assertTrue(data["resumeCheck"]["isValid"])

    def test_short_text_is_flagged_but_returned(self):
        response = self.client.post(
            "/v1/upload/parse-file",
            files={"file": ("note.txt", BytesIO(b"hello there"), "text/plain")},
        )
        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.json()["data"]["resumeCheck"]["isValid"])

    def test_unsupported_type(self):
        response = self.client.post(
            "/v1/upload/parse-file",
            files={"file": ("photo.png", BytesIO(b"\x89PNG"), "image/png")},
        )
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()["success"])

    def test_empty_text_file(self):
        response = self.client.post(
            "/v1/upload/parse-file",
            files={"file": ("empty.txt", BytesIO(b"   \n"), "text/plain")},
        )
        self.assertEqual(response.status_code, 422)


if __name__ == "__main__":
    unittest.main()
