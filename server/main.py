#!/usr/bin/env python3
"""
FastAPI preview backend for structforge.
Parses posted tree text and returns the plan; never touches the filesystem.
"""

import os

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from structforge.parser import ParseOptions, parse_to_plan
from structforge.paths import ScaffoldPathError
from structforge.render import render_plan
from structforge.utils import known_files, load_cfg

# -----------------------------------------------------------
# Config: STRUCTFORGE_CONFIG yaml, STRUCTFORGE_ROOT overrides its root
# -----------------------------------------------------------
CFG = load_cfg(os.environ.get("STRUCTFORGE_CONFIG"))
ROOT_DIR = os.path.abspath(os.environ.get("STRUCTFORGE_ROOT", CFG["server"]["root_dir"]))
KNOWN = known_files(CFG)

app = FastAPI(title="structforge plan preview")


class PlanRequest(BaseModel):
    text: str
    infer_root: bool = False


# -----------------------------------------------------------
# API: plan for a text tree
# -----------------------------------------------------------
@app.post("/api/plan")
def preview_plan(req: PlanRequest):
    """Return the plan for ``req.text`` with paths relative to the server root."""
    if not req.text.strip():
        return JSONResponse({"error": "Empty input"}, status_code=400)
    try:
        plan, base_root = parse_to_plan(
            req.text, ParseOptions(root_dir=ROOT_DIR, infer_root=req.infer_root, known_files=KNOWN)
        )
    except ScaffoldPathError as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    return {
        "base_root": os.path.relpath(base_root, ROOT_DIR),
        "items": [
            {"kind": it.kind, "path": os.path.relpath(it.path, ROOT_DIR)} for it in plan
        ],
        "tree": render_plan(plan, base_root),
    }


# -----------------------------------------------------------
# Health check / status endpoint
# -----------------------------------------------------------
@app.get("/api/status")
def status():
    """Simple heartbeat endpoint."""
    return {"service": "structforge", "status": "ok", "root_dir": ROOT_DIR}


# -----------------------------------------------------------
# Run (only if executed directly)
# -----------------------------------------------------------
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("server.main:app", host="127.0.0.1", port=8000, reload=True)
