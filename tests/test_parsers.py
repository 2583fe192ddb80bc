import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from career_copilot.ai.errors import ResponseUnusableError  # noqa: E402
from career_copilot.schemas import CareerPath, CareerPathMinimal, PathBasic  # noqa: E402
from career_copilot.services.career_path_service import (  # noqa: E402
    parse_career_path_details_response,
    parse_career_paths_response,
)
from career_copilot.services.resume_service import parse_resume_response  # noqa: E402
from career_copilot.services.roadmap_service import (  # noqa: E402
    DEFAULT_RISK_FACTORS,
    DEFAULT_SUCCESS_METRICS,
    parse_roadmap_response,
)
from career_copilot.services.skill_gap_service import (  # noqa: E402
    DEFAULT_SUMMARY,
    parse_skill_gap_response,
)


def _career_path() -> CareerPath:
    return CareerPath(
        role_id="path_002",
        role_name="Data Engineer",
        description="Build and run data platforms.",
        market_demand_score=80,
        industry_alignment=70,
        required_skills=["Spark", "Airflow"],
        effort_level="Medium",
        reward_potential="High",
        reasoning="Strong overlap with backend work.",
    )


class ResumeParserTests(unittest.TestCase):
    def test_fenced_response_is_normalized(self):
        raw = (
            "```json\n"
            '{"name": " ", "currentRole": " Senior Software Engineer ", "yearsOfExperience": "5+ years", '
            '"techStack": ["React", "Node.js", ""], "strengthAreas": "Leadership", '
            '"industryBackground": "Fintech"}\n'
            "```"
        )
        profile = parse_resume_response(raw)
        self.assertIsNone(profile.name)
        self.assertEqual(profile.current_role, "Senior Software Engineer")
        self.assertEqual(profile.years_of_experience, 5)
        self.assertEqual(profile.tech_stack, ["React", "Node.js"])
        self.assertEqual(profile.strength_areas, ["Leadership"])
        self.assertIsNone(profile.certifications)

    def test_truncated_response_keeps_what_arrived(self):
        raw = '{"name": "Jo", "currentRole": "Designer", "yearsOfExperience": 3, "techStack": ["Figma", "Sket'
        profile = parse_resume_response(raw)
        self.assertEqual(profile.current_role, "Designer")
        self.assertEqual(profile.industry_background, "")
        self.assertEqual(profile.tech_stack[0], "Figma")

    def test_missing_required_fields_are_unusable(self):
        with self.assertRaises(ResponseUnusableError) as ctx:
            parse_resume_response('{"name": "A"}')
        self.assertIn("resume", str(ctx.exception))


class CareerPathParserTests(unittest.TestCase):
    RAW_MINIMAL = (
        "Here are the paths:\n"
        '[{"id": "path_001", "n": "Staff Engineer", "d": "Lead architecture", "md": 140, "ia": "85", '
        '"sk": ["System design", " "]}, '
        '{"id": "path_001", "n": "Dup", "d": "x", "md": 50, "ia": 50}, '
        '{"n": "Engineering Manager", "d": "Lead people", "md": 75, "ia": 60, "sk": []}, '
        '{"id": "path_004", "n": "", "d": "bad", "md": 10, "ia": 10}]'
    )

    def test_compressed_keys_are_expanded_and_cleaned(self):
        paths = parse_career_paths_response(self.RAW_MINIMAL)
        self.assertEqual([path.role_id for path in paths], ["path_001", "path_003"])
        self.assertTrue(all(isinstance(path, CareerPathMinimal) for path in paths))
        first = paths[0]
        self.assertEqual(first.role_name, "Staff Engineer")
        self.assertEqual(first.market_demand_score, 100)
        self.assertEqual(first.industry_alignment, 85)
        self.assertEqual(first.required_skills, ["System design"])

    def test_expected_count_truncates(self):
        paths = parse_career_paths_response(self.RAW_MINIMAL, expected_count=1)
        self.assertEqual(len(paths), 1)

    def test_wrapped_list_is_unwrapped(self):
        raw = (
            '{"careerPaths": [{"roleId": "a", "roleName": "A", "description": "d", '
            '"marketDemandScore": 50, "industryAlignment": 40}]}'
        )
        paths = parse_career_paths_response(raw)
        self.assertEqual(paths[0].role_id, "a")

    def test_bracketed_note_before_paths_is_ignored(self):
        raw = (
            '{"note": "scores per [1]", "paths": [{"id": "path_001", "n": "Data Engineer", '
            '"d": "Builds pipelines", "md": 80, "ia": 70, "sk": ["Spark"]}]}'
        )
        paths = parse_career_paths_response(raw)
        self.assertEqual([path.role_name for path in paths], ["Data Engineer"])

    def test_full_variant_normalizes_ordinals(self):
        raw = (
            '[{"roleId": "cloud", "roleName": "Cloud Architect", "description": "d", "marketDemandScore": 90, '
            '"industryAlignment": 80, "requiredSkills": ["AWS"], "effortLevel": "Very High", '
            '"rewardPotential": "High", "reasoning": "Uses AWS daily."}]'
        )
        paths = parse_career_paths_response(raw, variant="full")
        self.assertIsInstance(paths[0], CareerPath)
        self.assertEqual(paths[0].effort_level, "High")

    def test_no_valid_entries_is_unusable(self):
        with self.assertRaises(ResponseUnusableError):
            parse_career_paths_response('[{"n": ""}, 42]')

    def test_details_take_identity_from_request(self):
        raw = '{"roleId": "wrong", "effortLevel": "Very Low", "rewardPotential": "High", "reasoning": " Good fit "}'
        details = parse_career_path_details_response(raw, PathBasic(role_id="path_001", role_name="Staff Engineer"))
        self.assertEqual(details.role_id, "path_001")
        self.assertEqual(details.role_name, "Staff Engineer")
        self.assertEqual(details.effort_level, "Low")
        self.assertEqual(details.reasoning, "Good fit")
        self.assertEqual(details.detailed_description, "")


class SkillGapParserTests(unittest.TestCase):
    def test_truncated_response_is_recovered_and_sorted(self):
        raw = (
            '```json\n{"careerPathId": "p1", "careerPathName": "Data Engineer", "overallGapSeverity": "Very High", '
            '"skillGaps": [{"skillName": "Spark", "currentLevel": "None", "requiredLevel": "Advanced", '
            '"importance": "Medium"}, {"skillName": "Airflow", "currentLevel": "Beginner", '
            '"requiredLevel": "Advanced", "importance": "High", "learningResources": ["Docs"]}, '
            '{"skillName": "dbt", "currentLev'
        )
        analysis = parse_skill_gap_response(raw, _career_path())
        self.assertEqual(analysis.overall_gap_severity, "High")
        self.assertEqual([gap.skill_name for gap in analysis.skill_gaps], ["Airflow", "Spark"])
        self.assertEqual(analysis.career_path_id, "path_002")
        self.assertEqual(analysis.estimated_time_to_close, "6-12 months")
        self.assertEqual(analysis.summary, DEFAULT_SUMMARY)

    def test_field_extraction_fallback(self):
        raw = (
            "{'careerPathId': 'p1', \"overallGapSeverity\": \"Very High\", \"skillGaps\": "
            '[{"skillName": "Go", "currentLevel": "Beginner", "requiredLevel": "Advanced", "importance": "High"}]}'
        )
        analysis = parse_skill_gap_response(raw, _career_path())
        self.assertEqual(analysis.overall_gap_severity, "High")
        self.assertEqual(len(analysis.skill_gaps), 1)
        self.assertEqual(analysis.skill_gaps[0].skill_name, "Go")

    def test_invalid_severity_is_derived_from_gaps(self):
        raw = (
            '{"careerPathId": "p1", "careerPathName": "X", "overallGapSeverity": "Huge", '
            '"estimatedTimeToClose": "4 months", "summary": "Ok", '
            '"skillGaps": [{"skillName": "SQL", "currentLevel": "Expert", "requiredLevel": "Expert", '
            '"importance": "Low"}, {"skillName": "Bad", "currentLevel": "Guru", "requiredLevel": "Expert", '
            '"importance": "High"}]}'
        )
        analysis = parse_skill_gap_response(raw)
        self.assertEqual(analysis.overall_gap_severity, "Low")
        self.assertEqual([gap.skill_name for gap in analysis.skill_gaps], ["SQL"])
        self.assertEqual(analysis.estimated_time_to_close, "4 months")


class RoadmapParserTests(unittest.TestCase):
    def test_empty_phases_use_fallback_template(self):
        raw = '{"careerPathId": "x", "careerPathName": "y", "timelineMonths": 8, "phases": [], "successMetrics": []}'
        roadmap = parse_roadmap_response(raw)
        self.assertEqual(roadmap.timeline_months, 8)
        self.assertEqual([phase.phase_number for phase in roadmap.phases], [1, 2])
        self.assertEqual([phase.duration for phase in roadmap.phases], ["Month 1-4", "Month 5-8"])
        self.assertEqual(roadmap.success_metrics, DEFAULT_SUCCESS_METRICS)
        self.assertEqual(roadmap.risk_factors, DEFAULT_RISK_FACTORS)
        self.assertEqual(roadmap.support_resources, [])

    def test_phases_are_renumbered_and_durations_filled(self):
        raw = (
            '{"careerPathId": "x", "careerPathName": "y", "phases": ['
            '{"phaseNumber": 3, "skillsFocus": ["Go"], "learningDirection": "Basics"}, '
            '{"phaseNumber": 7, "duration": "", "milestones": ["Ship"]}], '
            '"successMetrics": ["Hired"], "riskFactors": ["Time"]}'
        )
        roadmap = parse_roadmap_response(raw, career_path=_career_path(), timeline_months=6)
        self.assertEqual(roadmap.career_path_id, "path_002")
        self.assertEqual([phase.phase_number for phase in roadmap.phases], [1, 2])
        self.assertEqual([phase.duration for phase in roadmap.phases], ["Month 1-3", "Month 4-6"])
        self.assertEqual(roadmap.phases[1].skills_focus, [])
        self.assertEqual(roadmap.success_metrics, ["Hired"])

    def test_truncated_roadmap_keeps_complete_phases(self):
        raw = (
            '{"careerPathId": "a", "careerPathName": "b", "timelineMonths": 6, "phases": ['
            '{"phaseNumber": 1, "duration": "Month 1-3", "skillsFocus": ["Go"], "learningDirection": "Basics", '
            '"projectIdeas": ["CLI"], "milestones": ["Ship"], "actionItems": ["Read"]}, '
            '{"phaseNumber": 2, "duration": "Month 4-6", "skillsFocus": ["gRPC", "Kub'
        )
        roadmap = parse_roadmap_response(raw, timeline_months=6)
        self.assertEqual(len(roadmap.phases), 2)
        self.assertEqual(roadmap.phases[0].project_ideas, ["CLI"])
        self.assertEqual(roadmap.phases[1].duration, "Month 4-6")
        self.assertEqual(roadmap.risk_factors, DEFAULT_RISK_FACTORS)

    def test_phase_count_is_capped(self):
        phases = ", ".join(f'{{"phaseNumber": {n}, "duration": "Month {n}"}}' for n in range(1, 9))
        raw = f'{{"careerPathId": "a", "careerPathName": "b", "phases": [{phases}]}}'
        roadmap = parse_roadmap_response(raw, timeline_months=12)
        self.assertEqual(len(roadmap.phases), 5)

    def test_recovered_timeline_is_capped(self):
        raw = '{"careerPathId": "a", "careerPathName": "b", "timelineMonths": 40, "phases": []}'
        self.assertEqual(parse_roadmap_response(raw).timeline_months, 24)


if __name__ == "__main__":
    unittest.main()
