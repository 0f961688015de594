"""Mock upstream server serving sample reports for local development.

Point the feed at it with:
    RESERVOIR_URL=http://localhost:8080/norfork.htm SCHEDULE_BASE_URL=http://localhost:8080/swpa/
"""
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
import uvicorn

FIXTURES = Path(__file__).parent / "tests" / "fixtures"

app = FastAPI()


@app.get("/norfork.htm", response_class=HTMLResponse)
async def reservoir_report():
    """Sample USACE reservoir page."""
    return (FIXTURES / "norfork.htm").read_text(encoding="utf-8")


@app.get("/swpa/{page}", response_class=HTMLResponse)
async def schedule_report(page: str):
    """Sample SWPA schedule; every day serves the Wednesday page."""
    if not page.endswith(".htm"):
        raise HTTPException(status_code=404, detail="Not Found")
    print(f"Serving schedule page {page}")
    return (FIXTURES / "wed.htm").read_text(encoding="utf-8")


if __name__ == "__main__":
    print("Starting mock upstream server on http://localhost:8080")
    uvicorn.run(app, host="127.0.0.1", port=8080, log_level="info")
