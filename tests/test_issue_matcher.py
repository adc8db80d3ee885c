from core.entities import JiraIssue, RequirementFields
from core.issue_matcher import build_match_text, score_issues


ISSUES = [
    JiraIssue(key="PROJ-1", summary="Enviar notificaciones por correo"),
    JiraIssue(key="PROJ-2", summary="Exportar reportes en PDF"),
]


class TestBuildMatchText:
    def test_all_fields_in_order(self):
        fields = RequirementFields(
            title="Notificaciones",
            description="Enviar avisos",
            user_story="Como usuario quiero avisos",
            acceptance_criteria=("llega en 1 minuto", "incluye enlace"),
            issues=("falta plantilla",),
        )
        assert build_match_text(fields) == (
            "Notificaciones Enviar avisos Como usuario quiero avisos "
            "llega en 1 minuto incluye enlace falta plantilla"
        )

    def test_blank_segments_skipped(self):
        fields = RequirementFields(
            title="Login", description="   ", user_story=None, acceptance_criteria=("a1", "a2")
        )
        assert build_match_text(fields) == "Login a1 a2"

    def test_everything_empty(self):
        assert build_match_text(RequirementFields()) == ""


class TestScoreIssues:
    def test_empty(self):
        assert score_issues([], "") == []

    def test_relevant_issue_ranks_first(self):
        scored = score_issues(ISSUES, "enviar notificaciones por email a los usuarios")
        assert [s.key for s in scored] == ["PROJ-1", "PROJ-2"]
        assert scored[0].match_score > 0
        assert scored[1].match_score == 0

    def test_scores_are_non_increasing(self):
        issues = ISSUES + [
            JiraIssue(key="PROJ-3", summary="Notificaciones push"),
            JiraIssue(key="PROJ-4", summary="Reportes por correo"),
        ]
        scored = score_issues(issues, "enviar notificaciones por correo")
        values = [s.match_score for s in scored]
        assert values == sorted(values, reverse=True)
        assert all(0 <= v <= 1 for v in values)

    def test_output_is_permutation(self):
        scored = score_issues(ISSUES, "reportes")
        assert sorted(s.key for s in scored) == sorted(i.key for i in ISSUES)

    def test_ties_keep_input_order(self):
        issues = [
            JiraIssue(key="A-1", summary="uno"),
            JiraIssue(key="A-2", summary="dos"),
            JiraIssue(key="A-3", summary="tres"),
        ]
        assert [s.key for s in score_issues(issues, "nada que ver")] == ["A-1", "A-2", "A-3"]

    def test_empty_match_text_scores_zero(self):
        assert all(s.match_score == 0 for s in score_issues(ISSUES, ""))

    def test_issue_fields_are_kept(self):
        issue = JiraIssue(
            key="PROJ-9", summary="Login", id="10009", status="To Do", url="https://jira/PROJ-9"
        )
        [scored] = score_issues([issue], "login")
        assert (scored.id, scored.status, scored.url) == ("10009", "To Do", "https://jira/PROJ-9")
