import logging

import uvicorn

from src.image_upload.config import settings
from src.image_upload.main import app

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logger.info("🚀 Server running on http://localhost:%d", settings.port)
    logger.info("📤 Upload endpoint: POST http://localhost:%d/upload-image", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
