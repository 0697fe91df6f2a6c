import uvicorn

from relay_api.config.settings import get_settings
from relay_api.main import create_app

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)
