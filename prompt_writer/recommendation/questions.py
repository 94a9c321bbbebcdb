"""
Fixed three-step question flow for the recommendation wizard.

Option values are exactly the strings the answer classifier understands, so
the client can send the chosen values back as keywords unchanged.
"""

from typing import Any, Dict, List

from prompt_writer.recommendation.types import Complexity, Priority, Purpose

QUESTIONS: List[Dict[str, Any]] = [
    {
        "step": 1,
        "question": "어떤 목적으로 AI를 사용하고 싶으신가요?",
        "options": [
            {"value": Purpose.WRITING.value, "label": "글쓰기/창작"},
            {"value": Purpose.CODING.value, "label": "프로그래밍/개발"},
            {"value": Purpose.ANALYSIS.value, "label": "데이터 분석/리포트"},
            {"value": Purpose.TRANSLATION.value, "label": "번역"},
            {"value": Purpose.VISUAL.value, "label": "이미지/시각 작업"},
            {"value": Purpose.GENERAL.value, "label": "일반적인 질답"},
        ],
    },
    {
        "step": 2,
        "question": "작업의 복잡도는 어느 정도인가요?",
        "options": [
            {"value": Complexity.SIMPLE.value, "label": "간단함 (빠른 답변 필요)"},
            {"value": Complexity.MEDIUM.value, "label": "보통 (일반적인 작업)"},
            {"value": Complexity.COMPLEX.value, "label": "복잡함 (고급 분석/창작)"},
        ],
    },
    {
        "step": 3,
        "question": "비용과 성능 중 무엇이 더 중요한가요?",
        "options": [
            {"value": Priority.COST.value, "label": "비용 효율성"},
            {"value": Priority.PERFORMANCE.value, "label": "최고 성능"},
            {"value": Priority.BALANCED.value, "label": "균형 잡힌 선택"},
        ],
    },
]

TOTAL_STEPS = len(QUESTIONS)


def get_question(step: int) -> Dict[str, Any]:
    """
    Return the question payload for a 1-based step.

    Raises:
        ValueError: If step is outside 1..TOTAL_STEPS
    """
    if step < 1 or step > TOTAL_STEPS:
        raise ValueError(f"Invalid step {step}. Use a value between 1 and {TOTAL_STEPS}.")

    return {
        "current_question": QUESTIONS[step - 1],
        "total_steps": TOTAL_STEPS,
        "progress": step / TOTAL_STEPS * 100,
    }
