"""
AI components for the ClubFit backend.

club_advisor: Gemini (google-genai) calls that suggest iron models, explain
ranked recommendations and describe models missing from the catalog.
The ranking itself is deterministic (clubfit.services.engine).
"""
