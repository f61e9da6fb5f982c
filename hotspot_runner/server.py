from __future__ import annotations
from typing import Any, Dict, List, Optional
import argparse
import logging

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .tool_registry import run_tool, capabilities

log = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8766

app = FastAPI(title="Hotspot Runner", version="0.1")


class ToolRequest(BaseModel):
    params: Dict[str, Any] = {}


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/capabilities")
def get_capabilities() -> Dict[str, Any]:
    return capabilities()


@app.post("/tool/{tool_name}")
def tool_call(tool_name: str, req: ToolRequest) -> Dict[str, Any]:
    try:
        return run_tool(tool_name, req.params or {})
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {tool_name}")
    except Exception as e:
        log.exception("Tool %s failed", tool_name)
        raise HTTPException(status_code=500, detail=str(e))


def serve(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    import uvicorn
    from hotspot.config import HotspotConfig
    from hotspot.logs import setup_logging

    setup_logging(log_file=HotspotConfig.load().log_file)
    log.info("Runner listening on %s:%s", host, port)
    uvicorn.run(app, host=host, port=port, log_level="warning")


def main(argv: Optional[List[str]] = None) -> None:
    p = argparse.ArgumentParser(prog="hotspot_runner.server", description="Local hotspot runner service")
    p.add_argument("--host", default=DEFAULT_HOST)
    p.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = p.parse_args(argv)
    serve(args.host, args.port)


if __name__ == "__main__":
    main()
