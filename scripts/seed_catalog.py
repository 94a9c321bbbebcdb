#!/usr/bin/env python3
"""
Catalog Seed Script

Upserts the reference catalog the recommendation rules depend on:
5 AI providers, 7 AI models (keyed by model_key), 8 template categories
and 8 tags. Safe to run repeatedly; rows are matched on their unique name
(or model_key for models).

Writes need a key that bypasses RLS, so this script reads
SUPABASE_SERVICE_ROLE_KEY from the environment. The API process never uses it.

Usage:
    python scripts/seed_catalog.py --dry-run
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --only models
"""

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
from supabase import Client, create_client

from prompt_writer.utils.constants import MODEL_KEYS

load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


PROVIDERS: List[Dict[str, Any]] = [
    {"name": "OpenAI", "company": "OpenAI", "website_url": "https://openai.com", "api_base_url": "https://api.openai.com/v1"},
    {"name": "Anthropic", "company": "Anthropic", "website_url": "https://anthropic.com", "api_base_url": "https://api.anthropic.com"},
    {"name": "Google AI", "company": "Google", "website_url": "https://ai.google.dev", "api_base_url": "https://generativelanguage.googleapis.com"},
    {"name": "Stability AI", "company": "Stability AI", "website_url": "https://stability.ai", "api_base_url": "https://api.stability.ai"},
    {"name": "Midjourney", "company": "Midjourney Inc.", "website_url": "https://midjourney.com", "api_base_url": None},
]

# "provider" is resolved to provider_id at upsert time
MODELS: List[Dict[str, Any]] = [
    {
        "provider": "OpenAI", "name": "GPT-4", "model_key": MODEL_KEYS["GPT_4"], "version": "4.0",
        "description": "가장 고성능의 범용 AI 모델", "modality": "text",
        "context_length": 8192, "max_tokens": 4096, "supports_streaming": True, "supports_functions": True,
        "strengths": ["창작", "분석", "코딩", "논리적 사고"], "use_cases": ["복잡한 문제 해결", "창의적 글쓰기", "코드 생성"],
        "performance_score": 9, "pricing_tier": "premium", "input_price_per_1k": 0.03, "output_price_per_1k": 0.06,
        "api_endpoint": "/chat/completions", "api_available": True, "release_date": "2023-03-14",
    },
    {
        "provider": "OpenAI", "name": "GPT-3.5 Turbo", "model_key": MODEL_KEYS["GPT_35_TURBO"], "version": "3.5",
        "description": "빠르고 비용 효율적인 AI 모델", "modality": "text",
        "context_length": 4096, "max_tokens": 4096, "supports_streaming": True, "supports_functions": True,
        "strengths": ["빠른 응답", "비용 효율성"], "use_cases": ["일반적인 질답", "간단한 작업"],
        "performance_score": 7, "pricing_tier": "standard", "input_price_per_1k": 0.001, "output_price_per_1k": 0.002,
        "api_endpoint": "/chat/completions", "api_available": True, "release_date": "2023-03-01",
    },
    {
        "provider": "Anthropic", "name": "Claude 3", "model_key": MODEL_KEYS["CLAUDE_3"], "version": "3.0",
        "description": "안전하고 도움이 되는 AI 어시스턴트", "modality": "text",
        "context_length": 200000, "max_tokens": 4096, "supports_streaming": True, "supports_functions": False,
        "strengths": ["안전성", "긴 문맥 이해"], "use_cases": ["문서 분석", "안전한 대화"],
        "performance_score": 9, "pricing_tier": "premium", "input_price_per_1k": 0.015, "output_price_per_1k": 0.075,
        "api_endpoint": "/v1/messages", "api_available": True, "release_date": "2024-02-29",
    },
    {
        "provider": "Google AI", "name": "Gemini Pro", "model_key": MODEL_KEYS["GEMINI_PRO"], "version": "1.0",
        "description": "구글의 멀티모달 AI 모델", "modality": "multimodal",
        "context_length": 30720, "max_tokens": 2048, "supports_streaming": True, "supports_functions": True,
        "strengths": ["멀티모달", "검색 연동"], "use_cases": ["이미지 분석", "검색 기반 답변"],
        "performance_score": 8, "pricing_tier": "standard", "input_price_per_1k": 0.00025, "output_price_per_1k": 0.0005,
        "api_endpoint": "/v1beta/models/gemini-pro:generateContent", "api_available": True, "release_date": "2023-12-06",
    },
    {
        "provider": "OpenAI", "name": "DALL-E 3", "model_key": MODEL_KEYS["DALL_E_3"], "version": "3.0",
        "description": "고품질 이미지 생성 AI", "modality": "image",
        "context_length": 4000, "max_tokens": None, "supports_streaming": False, "supports_functions": False,
        "strengths": ["이미지 생성", "창의적 표현", "텍스트 이해"], "use_cases": ["일러스트 제작", "로고 디자인", "컨셉 아트"],
        "performance_score": 9, "pricing_tier": "premium", "input_price_per_1k": 0.04, "output_price_per_1k": 0.08,
        "api_endpoint": "/images/generations", "api_available": True, "release_date": "2023-10-01",
    },
    {
        "provider": "Midjourney", "name": "Midjourney", "model_key": MODEL_KEYS["MIDJOURNEY"], "version": "6.0",
        "description": "예술적이고 창의적인 이미지 생성", "modality": "image",
        "context_length": None, "max_tokens": None, "supports_streaming": False, "supports_functions": False,
        "strengths": ["예술적 품질", "스타일 다양성", "고해상도"], "use_cases": ["예술 작품", "창작물", "상업용 이미지"],
        "performance_score": 9, "pricing_tier": "premium", "input_price_per_1k": None, "output_price_per_1k": None,
        "api_endpoint": None, "api_available": False, "release_date": "2024-01-01",
    },
    {
        "provider": "Stability AI", "name": "Stable Diffusion", "model_key": MODEL_KEYS["STABLE_DIFFUSION"], "version": "XL",
        "description": "오픈소스 이미지 생성 모델", "modality": "image",
        "context_length": 77, "max_tokens": None, "supports_streaming": False, "supports_functions": False,
        "strengths": ["무료 사용", "커스터마이징", "빠른 생성"], "use_cases": ["개인 프로젝트", "실험", "프로토타이핑"],
        "performance_score": 7, "pricing_tier": "free", "input_price_per_1k": 0, "output_price_per_1k": 0,
        "api_endpoint": "/v1/generation/stable-diffusion-xl-1024-v1-0/text-to-image", "api_available": True,
        "release_date": "2023-07-26",
    },
]

CATEGORIES: List[Dict[str, Any]] = [
    {"name": "글쓰기 및 창작", "description": "텍스트 생성, 창의적 글쓰기, 콘텐츠 작성", "icon": "✍️"},
    {"name": "프로그래밍", "description": "코드 생성, 디버깅, 기술 문서 작성", "icon": "💻"},
    {"name": "데이터 분석", "description": "데이터 해석, 리포트 작성, 통계 분석", "icon": "📊"},
    {"name": "번역", "description": "다국어 번역, 언어 학습, 문화적 맥락 이해", "icon": "🌐"},
    {"name": "이미지 생성", "description": "시각적 콘텐츠 생성, 디자인, 아트워크", "icon": "🎨"},
    {"name": "교육 및 학습", "description": "학습 자료, 퀴즈, 설명", "icon": "📚"},
    {"name": "비즈니스", "description": "마케팅, 기획, 프레젠테이션", "icon": "💼"},
    {"name": "일반 대화", "description": "일상 대화, 질답, 상담", "icon": "💬"},
]

TAGS: List[Dict[str, Any]] = [
    {"name": "초보자", "color": "#10B981"},
    {"name": "고급", "color": "#F59E0B"},
    {"name": "빠른답변", "color": "#3B82F6"},
    {"name": "창의적", "color": "#8B5CF6"},
    {"name": "분석적", "color": "#EF4444"},
    {"name": "실용적", "color": "#6B7280"},
    {"name": "전문적", "color": "#1F2937"},
    {"name": "교육용", "color": "#059669"},
]

SECTIONS = ("providers", "models", "categories", "tags")


def build_category_rows() -> List[Dict[str, Any]]:
    """Categories with sort_order assigned from list position (1-based)."""
    return [{**cat, "sort_order": i + 1} for i, cat in enumerate(CATEGORIES)]


def build_model_rows(provider_ids: Dict[str, int]) -> List[Dict[str, Any]]:
    """
    Replace each model's provider name with its provider_id.

    Models whose provider is unknown are skipped with a warning.
    """
    rows = []
    for model in MODELS:
        provider_id = provider_ids.get(model["provider"])
        if provider_id is None:
            logger.warning(f"Provider '{model['provider']}' not found, skipping model '{model['name']}'")
            continue
        row = {k: v for k, v in model.items() if k != "provider"}
        row["provider_id"] = provider_id
        rows.append(row)
    return rows


def create_admin_client() -> Client:
    url = os.getenv("SUPABASE_URL", "")
    key = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
    if not url or not key:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set to seed the catalog")
    return create_client(url, key)


def upsert_providers(client: Client) -> Dict[str, int]:
    result = client.table("ai_provider").upsert(PROVIDERS, on_conflict="name").execute()
    logger.info(f"Upserted {len(result.data or [])} providers")

    # Re-read so ids are known even when nothing changed
    rows = client.table("ai_provider").select("id, name").execute().data or []
    return {row["name"]: int(row["id"]) for row in rows}


def upsert_models(client: Client, provider_ids: Dict[str, int]) -> int:
    rows = build_model_rows(provider_ids)
    result = client.table("ai_model").upsert(rows, on_conflict="model_key").execute()
    return len(result.data or [])


def upsert_rows(client: Client, table: str, rows: List[Dict[str, Any]]) -> int:
    result = client.table(table).upsert(rows, on_conflict="name").execute()
    return len(result.data or [])


def print_plan(sections: List[str]) -> None:
    """Print what would be written without connecting."""
    plan = {
        "providers": PROVIDERS,
        "models": [{k: v for k, v in m.items() if k not in ("strengths", "use_cases")} for m in MODELS],
        "categories": build_category_rows(),
        "tags": TAGS,
    }
    for section in sections:
        print(f"\n=== {section} ({len(plan[section])}) ===")
        for row in plan[section]:
            print(json.dumps(row, ensure_ascii=False, default=str))


def seed(sections: List[str]) -> None:
    client = create_admin_client()

    provider_ids: Dict[str, int] = {}
    if "providers" in sections or "models" in sections:
        provider_ids = upsert_providers(client)

    if "models" in sections:
        count = upsert_models(client, provider_ids)
        logger.info(f"Upserted {count} AI models")

    if "categories" in sections:
        count = upsert_rows(client, "category", build_category_rows())
        logger.info(f"Upserted {count} categories")

    if "tags" in sections:
        count = upsert_rows(client, "tag", TAGS)
        logger.info(f"Upserted {count} tags")


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the AI model and template catalog")
    parser.add_argument(
        "--only",
        choices=SECTIONS,
        action="append",
        help="Seed only this section (repeatable). Defaults to all sections."
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the rows that would be written without connecting"
    )
    args = parser.parse_args()

    sections = args.only or list(SECTIONS)

    if args.dry_run:
        print_plan(sections)
        return 0

    try:
        seed(sections)
    except ValueError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.error(f"Seeding failed: {e}", exc_info=True)
        return 1

    logger.info("Catalog seed complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
