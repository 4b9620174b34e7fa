"""
ClubFit backend: golf iron recommendations.

Deterministic ranking over a Supabase club catalog, with Gemini for model
suggestions and explanations, and SerpAPI image search for catalog
enrichment and the image proxy fallback.
"""
