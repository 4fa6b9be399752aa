from __future__ import annotations

import json
import logging
import re
from typing import Callable, List, Optional, Sequence

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from eunoia.models.word import GeneratedWord

logger = logging.getLogger(__name__)

MAX_WORDS = 5
MAX_EXCLUDED_IN_PROMPT = 100

_KIND_BY_CATEGORY = {
    "사자성어": "사자성어",
    "속담": "속담",
    "단어": "한국어 단어",
    "영어": "영어 단어",
}

_PROMPT = """당신은 한국어 단어 추천 전문가입니다.

**중요: 다음 조건을 반드시 지켜주세요:**
1. 아래에 나열된 기존 단어들은 절대 포함하지 마세요.
2. 최근 한국에서 많이 사용되는 {kind}를 우선적으로 추천해주세요.
3. 공식 사전에 존재하는 {kind}만 추천해주세요.

**기존에 이미 사용된 {kind} 목록 (이 단어들은 제외해야 합니다):**
{excluded}

위 목록에 없는 {kind} {count}개를 추천해주세요.
각 항목에 대해 간단하고 명확한 뜻을 함께 제공해주세요.

응답 형식은 반드시 JSON 배열로 해주세요:
[
  {{"word": "단어1", "meaning": "뜻1"}},
  {{"word": "단어2", "meaning": "뜻2"}}
]
"""

_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


def build_prompt(category: str, excluding: Sequence[str]) -> str:
    kind = _KIND_BY_CATEGORY.get(category, f"'{category}' 주제의 단어")
    excluded = ", ".join(list(excluding)[:MAX_EXCLUDED_IN_PROMPT]) or "없음"
    return _PROMPT.format(kind=kind, excluded=excluded, count=MAX_WORDS)


def parse_words(text: str) -> List[GeneratedWord]:
    """Pull the JSON array of {"word", "meaning"} objects out of a model reply.

    Raises ValueError when no array can be parsed.
    """
    fenced = _FENCE.search(text)
    body = fenced.group(1) if fenced else text
    start, end = body.find("["), body.rfind("]")
    if start == -1 or end <= start:
        raise ValueError("No JSON array in response.")
    items = json.loads(body[start:end + 1])
    if not isinstance(items, list):
        raise ValueError("Response JSON is not an array.")

    words: List[GeneratedWord] = []
    for it in items:
        if not isinstance(it, dict):
            continue
        word = str(it.get("word", "")).strip()
        meaning = str(it.get("meaning", "")).strip()
        if word and meaning:
            words.append(GeneratedWord(word=word, meaning=meaning))
    return words[:MAX_WORDS]


class GeminiWordGenerator:
    """Asks Gemini for new words, trying each configured model in turn.

    Never raises: a missing key, an API error or an unparsable reply all end
    up as an empty list. Retrying is the caller's business.
    """

    def __init__(self, api_key_provider: Callable[[], Optional[str]], models: Sequence[str]):
        self.api_key_provider = api_key_provider
        self.models = list(models)

    def generate(self, category: str, excluding: Sequence[str]) -> List[GeneratedWord]:
        try:
            api_key = self.api_key_provider()
        except Exception:
            logger.exception("Could not read the Gemini API key")
            return []
        if not api_key:
            logger.warning("No Gemini API key configured; skipping generation for %r", category)
            return []

        prompt = build_prompt(category, excluding)
        excluded = set(excluding)
        genai.configure(api_key=api_key)

        for model_name in self.models:
            logger.info("Requesting words for %r from %s (%d excluded)", category, model_name, len(excluded))
            try:
                response = genai.GenerativeModel(model_name).generate_content(prompt)
                words = parse_words(response.text)
            except google_exceptions.GoogleAPIError as e:
                logger.warning("Gemini model %s failed: %s", model_name, e)
                continue
            except ValueError as e:
                logger.warning("Unusable reply from %s: %s", model_name, e)
                continue
            except Exception:
                logger.exception("Unexpected error from Gemini model %s", model_name)
                continue
            fresh = [w for w in words if w.word not in excluded]
            logger.info("Gemini %s returned %d new words for %r", model_name, len(fresh), category)
            return fresh

        logger.warning("All Gemini models failed for %r", category)
        return []
