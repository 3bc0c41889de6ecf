from fastapi import FastAPI, HTTPException
from pathlib import Path
import json
import os

app = FastAPI(title="Mock Bank Server", version="1.0.0")
# Accounts file: BANK_STUB_ACCOUNTS env var, else accounts.json beside this module
ACCOUNTS_FILE = Path(os.environ.get("BANK_STUB_ACCOUNTS", Path(__file__).resolve().parent / "accounts.json"))

DEFAULT_ACCOUNTS = {
    "058:0123456789": "Adaeze Okafor",
    "044:1234567890": "Tunde Bakare",
    "057:2345678901": "Chioma Eze",
}


def load_accounts() -> dict:
    if ACCOUNTS_FILE.exists():
        return json.loads(ACCOUNTS_FILE.read_text())
    return DEFAULT_ACCOUNTS


@app.get("/health")
def health(): return {"status": "ok"}

@app.get("/bank/accounts/resolve")
def resolve_account(bank_code: str, account_number: str):
    name = load_accounts().get(f"{bank_code}:{account_number}")
    if name is None:
        raise HTTPException(status_code=404, detail="account not found")
    return {"bank_code": bank_code, "account_number": account_number, "account_name": name}
