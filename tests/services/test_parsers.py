"""
Resume, LinkedIn and cover letter parser tests
"""
from narrata.schemas.parsing import ParsedLinkedIn, ParsedResume, ResumeRole, ContactInfo
from narrata.services.cover_letter_parser import (
    extract_stories,
    has_stories,
    parse_cover_letter,
)
from narrata.services.linkedin_parser import (
    SAMPLE_PROFILE,
    build_linkedin_result,
    check_profile_accessibility,
    extract_profile_id,
    parse_linkedin,
    validate_linkedin_url,
)
from narrata.services.resume_parser import (
    build_resume_result,
    extract_case_studies,
    extract_quantifiable_results,
    parse_resume,
)


class TestResumeParser:

    def test_parse_resume_is_empty_with_low_confidence(self):
        data, result = parse_resume("resume.pdf", b"%PDF")
        assert data == ParsedResume()
        assert result.type == "resume"
        assert result.confidence == "low"
        assert result.summary == "Successfully parsed resume with 0 roles and 0 achievements"
        assert result.suggestions == [
            "Add quantifiable results to strengthen achievements",
            "Add missing contact information",
            "Add more work experience for better assessment",
            "Include more detailed achievements",
        ]

    def test_rich_resume_is_high_confidence(self):
        data = ParsedResume(
            roles=[
                ResumeRole(company="Acme", title="PM"),
                ResumeRole(company="Globex", title="APM"),
            ],
            skills=["SQL", "Roadmapping"],
            contact=ContactInfo(name="Jane", email="jane@example.com", linkedin="linkedin.com/in/jane"),
            total_achievements=5,
            has_quantifiable_results=True,
            has_case_studies=True,
        )
        result = build_resume_result(data)
        assert result.confidence == "high"
        assert result.suggestions == []
        assert "Complete contact information found" in result.details
        assert "Case study mentions detected" in result.details
        assert "2 skills identified" in result.details

    def test_quantifiable_results_are_full_phrases(self):
        text = "Drove a 40% increase in activation and grew to 5000 users in 6 months."
        assert extract_quantifiable_results(text) == ["40% increase", "5000 users", "6 months"]

    def test_case_studies(self):
        text = "Case study: Checkout redesign. Portfolio: design.example"
        assert extract_case_studies(text) == ["Case study: Checkout redesign", "Portfolio: design"]

    def test_nothing_to_extract(self):
        assert extract_quantifiable_results("Managed things") == []
        assert extract_case_studies("Managed things") == []


class TestLinkedInParser:

    def test_validate_url(self):
        assert validate_linkedin_url("https://www.linkedin.com/in/jane-doe")
        assert validate_linkedin_url("http://linkedin.com/company/acme/")
        assert validate_linkedin_url("https://linkedin.com/pub/jane")
        assert not validate_linkedin_url("https://www.linkedin.com/in/")
        assert not validate_linkedin_url("https://example.com/in/jane")
        assert not validate_linkedin_url("")

    def test_extract_profile_id(self):
        assert extract_profile_id("https://www.linkedin.com/in/jane-doe/") == "jane-doe"
        assert extract_profile_id("https://example.com") is None

    def test_accessibility(self):
        assert check_profile_accessibility("https://www.linkedin.com/in/jane").accessible is True
        invalid = check_profile_accessibility("jane")
        assert invalid.accessible is False
        assert invalid.reason == "Invalid LinkedIn URL"

    def test_sample_profile_diagnostics(self):
        data, result = parse_linkedin("https://www.linkedin.com/in/johndoe")
        assert len(data.experience) == 3
        assert result.confidence == "high"
        assert result.summary == "Successfully parsed LinkedIn profile with 3 roles and 6 skills"
        for detail in (
            "3 roles found",
            "58 total skill endorsements",
            "Extracurricular activities found",
            "8 recommendations received",
            "Strong professional network",
        ):
            assert detail in result.details
        assert result.suggestions == []

    def test_sparse_profile(self):
        data = ParsedLinkedIn.model_validate({
            **SAMPLE_PROFILE,
            "experience": SAMPLE_PROFILE["experience"][:1],
            "skills": SAMPLE_PROFILE["skills"][:2],
            "has_complete_dates": False,
            "connections": 40,
        })
        result = build_linkedin_result(data)
        # Too few skills overrides the low experience rating
        assert result.confidence == "medium"
        assert "Add missing start/end dates for better timeline" in result.suggestions
        assert "Add more work experience for better assessment" in result.suggestions
        assert "Add more skills to showcase your expertise" in result.suggestions
        assert "Strong professional network" not in result.details


LETTER = """Dear Hiring Manager,

I am excited to apply for the Senior Product Manager role at Globex.

Experience at Acme taught me to ship. I led the checkout redesign at Acme Corp, which drove a 25% increase in conversion.

Why Globex? I launched a self-serve onboarding flow that grew to 5000 users in 6 months.

Case study: Checkout redesign. More work at https://janedoe.dev/work

Thank you for your time and consideration.

Best regards,
Jane"""


class TestCoverLetterParser:

    def test_sections_follow_paragraph_cues(self):
        data, _ = parse_cover_letter(LETTER)
        assert [s.type for s in data.sections] == [
            "intro", "other", "experience", "other", "closing", "signature",
        ]
        intro, _, experience, case_study, closing, signature = data.sections
        assert intro.title == "Introduction"
        assert intro.suggestions == ["Expand introduction with more context about your interest"]
        # Consecutive experience paragraphs merge
        assert experience.content.count("\n\n") == 1
        assert experience.word_count == 38
        assert experience.has_stories and experience.has_quantifiable_results
        assert experience.suggestions == []
        assert case_study.title == "Case study: Checkout redesign"
        assert closing.suggestions == ["Add a stronger call to action"]
        assert signature.title == "Signature"

    def test_stories_links_and_case_studies(self):
        data, _ = parse_cover_letter(LETTER)
        assert [(s.content, s.company, s.quality) for s in data.stories] == [
            ("led the checkout redesign at Acme Corp, which drove a 25% increase in conversion.", "Acme Corp", "high"),
            ("launched a self-serve onboarding flow that grew to 5000 users in 6 months.", None, "high"),
            ("drove a 25% increase in conversion.", None, "medium"),
        ]
        assert data.case_studies == ["Case study: Checkout redesign"]
        assert data.external_links == ["https://janedoe.dev/work"]
        assert data.has_case_studies and data.has_external_links
        assert data.has_quantifiable_results
        assert data.quality == "medium"

    def test_letter_diagnostics(self):
        _, result = parse_cover_letter(LETTER)
        assert result.type == "cover_letter"
        assert result.confidence == "medium"
        assert result.summary == "Successfully parsed cover letter with 6 sections and 3 stories"
        assert result.details == [
            "6 sections identified",
            "Good section structure",
            "3 stories extracted",
            "Strong story content",
            "1 case studies detected",
            "1 external links found",
            "Quantifiable results detected",
            "Overall quality: medium",
        ]
        assert result.suggestions == []

    def test_sparse_letter_is_low_confidence(self):
        data, result = parse_cover_letter("Hi there, I want this job.")
        assert [s.type for s in data.sections] == ["intro"]
        assert data.total_words == 6
        assert data.stories == []
        assert data.quality == "low"
        # No stories overrides the single-section rating
        assert result.confidence == "low"
        assert result.suggestions == [
            "Consider organizing into clear sections (Intro, Experience, Closing)",
            "Add more specific examples of your achievements",
            "Add quantifiable results to strengthen your achievements",
            "Consider adding more specific examples and quantifiable results",
        ]

    def test_verbs_match_whole_words(self):
        assert not has_stories("A skilled communicator")
        assert extract_stories("I am skilled at many things, honestly.") == []

    def test_story_company_is_capitalized_run(self):
        story, = extract_stories("Managed a team of 8 engineers at Initech in Austin.")
        assert story.company == "Initech"
        assert story.has_quantifiable_results is False
        assert story.quality == "medium"

    def test_empty_text(self):
        data, result = parse_cover_letter("")
        assert data.sections == []
        assert data.total_words == 0
        assert result.confidence == "low"
