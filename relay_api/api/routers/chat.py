from fastapi import APIRouter, Depends, HTTPException
from starlette import status

from relay_api.api.schemas import ChatRequest, ChatResponse, ErrorResponse
from relay_api.services.relay_client import RelayClient, get_relay_client

router = APIRouter(
    prefix="/api",
    tags=["chat"],
)


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse},
        405: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def chat(
    request: ChatRequest,
    relay_client: RelayClient = Depends(get_relay_client),
) -> ChatResponse:
    """
    Relays a chat message to the configured Ollama model.

    Relay failures propagate as `RelayError` and are rendered by the
    application-level exception handler.
    """
    if not request.message:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Message is required"
        )

    text = await relay_client.send(request.message)
    return ChatResponse(response=text)
