import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "langschool.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=False,
        workers=int(os.getenv("WEB_CONCURRENCY", "1")),
        log_level="info",
        access_log=True
    )
