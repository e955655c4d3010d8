from fastapi import FastAPI
from dotenv import load_dotenv

load_dotenv()
from fastapi.middleware.cors import CORSMiddleware
from database import Base, engine
from datetime import datetime
import models  # noqa: F401  registers every table on Base.metadata
import routers.chart_of_accounts as chart_of_accounts
import routers.journal_entry as journal_entry
import routers.transactions as transactions
import routers.expenses as expenses
import routers.financial_reports as financial_reports
import os
import logging


def configure_logging():
    """
    Root logger: a timestamped file under LOG_DIR plus the console.
    """
    log_dir = os.getenv("LOG_DIR", "logs")
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    os.makedirs(log_dir, exist_ok=True) # Create the log directory if it doesn't exist

    # Create a unique log file name based on current date/time
    current_time_str = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    log_file = os.path.join(log_dir, f"app_{current_time_str}.log")

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        filename=log_file, # Log to a file
        filemode='a' # Append to the file if it exists
    )

    # Also output logs to the console
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    logging.getLogger().addHandler(console_handler) # Add to the root logger


configure_logging()
logger = logging.getLogger(__name__)
logger.info("Application starting up...")


# Create database tables
Base.metadata.create_all(bind=engine)


app = FastAPI(
    title="Ledger Posting API",
    version="1.0.0",
    description="Double-entry journal posting for multi-tenant accounting",
)

allowed_origins_str = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173"
)

# Split the string into a list, stripping any whitespace
allowed_origins = [origin.strip() for origin in allowed_origins_str.split(',')]

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chart_of_accounts.router)
app.include_router(journal_entry.router)
app.include_router(transactions.router)
app.include_router(expenses.router)
app.include_router(financial_reports.router)

@app.get("/")
async def health_check():
    return {"message": "Ledger Posting API is running"}
