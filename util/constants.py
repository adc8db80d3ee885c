class InternalURIs:
    API = "/api"
    V1 = API + "/v1"
    DOCUMENT_CANDIDATES = V1 + "/documents/{document_id}/candidates"
    DOCUMENT_DUPLICATES = V1 + "/documents/{document_id}/duplicates"
    MATCH_ISSUES = V1 + "/requirements/match-issues"
