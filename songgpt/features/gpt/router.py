from typing import Any

from fastapi import APIRouter, Depends

from songgpt.common.schemas.responses import ResponseDto
from songgpt.features.gpt.client import GptClient, get_gpt_client
from . import schemas, service

router = APIRouter(prefix="/chat-gpt", tags=["chat-gpt"])


@router.post("/question", response_model=ResponseDto[dict[str, Any]])
def send_question(payload: schemas.QuestionRequestDto, client: GptClient = Depends(get_gpt_client)):
    return ResponseDto.set_success("Success", service.ask_question(client, payload.question))


@router.post("/question/text", response_model=ResponseDto[schemas.AnswerResponseDto])
def send_text_question(payload: schemas.QuestionRequestDto, client: GptClient = Depends(get_gpt_client)):
    return ResponseDto.set_success("Success", service.ask_text_question(client, payload.question))


# 모델 정보 조회
@router.get("/model", response_model=ResponseDto[dict[str, Any]])
def check_model(client: GptClient = Depends(get_gpt_client)):
    return ResponseDto.set_success("Success", service.check_model(client))
