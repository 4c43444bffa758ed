import logging

from songgpt.core.exceptions import GptApiError
from songgpt.features.gpt.client import GptClient
from songgpt.features.gpt.schemas import AnswerResponseDto, GptRequestDto, Message

logger = logging.getLogger(__name__)


# 질문 1개 -> user role message 1개
def build_request(model: str, question: str) -> GptRequestDto:
    return GptRequestDto(model=model, messages=[Message(role="user", content=question)])


# GPT 응답 body 그대로 반환
def ask_question(client: GptClient, question: str) -> dict:
    request = build_request(client.model, question)
    logger.info("Asking GPT", extra={"model": client.model, "question_length": len(question)})
    return client.chat_completion(request.model_dump())


# 첫번째 choice 의 답변 text 만 반환
def ask_text_question(client: GptClient, question: str) -> AnswerResponseDto:
    body = ask_question(client, question)
    try:
        answer = body["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        logger.error("Unexpected GPT response shape", extra={"keys": list(body) if isinstance(body, dict) else None})
        raise GptApiError("GPT 응답 형식이 올바르지 않습니다.") from e
    return AnswerResponseDto(answer=answer)


# 모델 사용 가능 여부 확인
def check_model(client: GptClient) -> dict:
    return client.model_info()
