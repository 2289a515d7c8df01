import os
import datetime
import secrets

def get_run_id() -> str:
    """Run id for output folders; VIDTEXT_RUN_ID pins it for reproducible paths."""
    rid = os.getenv("VIDTEXT_RUN_ID")
    if rid:
        return rid
    ts = datetime.datetime.now(datetime.timezone.utc).strftime("%Y%m%d_%H%M%S")
    return f"{ts}_{secrets.token_hex(3)}"
