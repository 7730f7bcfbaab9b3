import uvicorn

from eduportal.config import settings

if __name__ == "__main__":
    uvicorn.run("eduportal.main:app", host="0.0.0.0", port=3000, log_level=settings.LOG_LEVEL.lower())
