"""
Stable catalog keys and fixed recommendation constants.

MODEL_KEYS map to ai_model.model_key. The recommendation rules reference
models only through these keys; ids are resolved against the live catalog
at lookup time.

See scripts/seed_catalog.py for the seeded catalog rows.
"""

MODEL_KEYS = {
    'GPT_4': 'gpt-4',
    'GPT_35_TURBO': 'gpt-3.5-turbo',
    'CLAUDE_3': 'claude-3-opus',
    'GEMINI_PRO': 'gemini-pro',
    'DALL_E_3': 'dall-e-3',
    'MIDJOURNEY': 'midjourney-v6',
    'STABLE_DIFFUSION': 'stable-diffusion-xl',
}

# Returned when no classification rule matches
FALLBACK_CATEGORY_LABEL = '범용 추천'
FALLBACK_CONFIDENCE = 60

# Sort rank for pricing tiers (premium first)
PRICING_TIER_RANK = {
    'premium': 1,
    'standard': 2,
}
DEFAULT_TIER_RANK = 3

# Content version bookkeeping
INITIAL_TEMPLATE_VERSION = '1.0'

# usage_log.action_type values
USAGE_ACTIONS = {
    'FAVORITE': 'favorite',
    'EXPORT': 'export',
}
