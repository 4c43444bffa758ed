from pydantic import BaseModel, Field


class QuestionRequestDto(BaseModel):
    question: str = Field(min_length=1)


# GPT chat completion 요청 body --- start
class Message(BaseModel):
    role: str
    content: str


class GptRequestDto(BaseModel):
    model: str
    messages: list[Message]
# GPT chat completion 요청 body --- end


class AnswerResponseDto(BaseModel):
    answer: str
