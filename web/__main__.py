"""
Web 진입점

실행 방법:
    python -m web

host/port는 config/settings.yaml의 web 섹션을 따른다.
"""

import uvicorn

from core.config.loader import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "web.app:app",
        host=settings.web.host,
        port=settings.web.port,
        reload=False,
    )
