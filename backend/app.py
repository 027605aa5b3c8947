import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from huggingface_hub import InferenceClient
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from backend import config, proxies
from backend.aggregation import AnalysisResult, analyze_symptoms
from backend.chat import ChatAssistant
from backend.classifier import ClassifierGateway
from backend.content import ContentGenerator
from backend.db import SessionLocal, PredictionLog
from backend.exceptions import SymptomCheckerError
from backend.log_config import setup_logging
from backend.schemas import (
    ChatRequest,
    ChatResponse,
    HealthResponse,
    PredictionResponse,
    SymptomRequest,
)

setup_logging(config.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = None
    if config.HF_TOKEN:
        logger.info("Initializing Hugging Face client...")
        client = InferenceClient(api_key=config.HF_TOKEN)
    else:
        logger.warning("HF_TOKEN not set; disease details fall back to placeholders and chat is disabled.")
    app.state.llm_client = client
    app.state.gateway = ClassifierGateway()
    yield
    logger.info("Cleaning up resources...")
    app.state.gateway.session.close()


app = FastAPI(
    title="Health Assistant AI Backend",
    description="Ranks disease predictions from a classifier ensemble and enriches them with LLM guidance.",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SymptomCheckerError)
async def symptom_checker_error_handler(request: Request, exc: SymptomCheckerError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = [str(err.get("ctx", {}).get("error") or err.get("msg")) for err in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={"error": "VALIDATION_ERROR", "message": "; ".join(messages), "details": {}},
    )


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_gateway(request: Request) -> ClassifierGateway:
    gateway = getattr(request.app.state, "gateway", None)
    return gateway or ClassifierGateway()


def get_generator(request: Request) -> ContentGenerator:
    return ContentGenerator(getattr(request.app.state, "llm_client", None))


def get_assistant(request: Request) -> ChatAssistant:
    return ChatAssistant(getattr(request.app.state, "llm_client", None))


def save_prediction_log(db: Session, result: AnalysisResult):
    try:
        record = PredictionLog(
            symptoms=", ".join(result.symptoms),
            predicted_diseases="\n".join(p.disease_name for p in result.predictions),
            top_probability=result.top.probability,
        )
        db.add(record)
        db.commit()
    except SQLAlchemyError:
        logger.exception("Failed to write prediction log")
        db.rollback()


@app.post("/predict", response_model=PredictionResponse)
def predict(
    request: SymptomRequest,
    db: Session = Depends(get_db),
    gateway: ClassifierGateway = Depends(get_gateway),
    generator: ContentGenerator = Depends(get_generator),
):
    result = analyze_symptoms(request.symptoms, gateway, generator)
    save_prediction_log(db, result)
    return result.to_response()


@app.post("/chat", response_model=ChatResponse)
def chat(request: ChatRequest, assistant: ChatAssistant = Depends(get_assistant)):
    text, history = assistant.reply(request.message, request.history, request.recent_symptoms)
    return ChatResponse(message=text, history=history)


@app.get("/recipes")
def recipes(query: str = Query(..., min_length=1)):
    return proxies.search_recipes(query)


@app.get("/recipes/{recipe_id}")
def recipe_detail(recipe_id: int):
    return proxies.get_recipe(recipe_id)


@app.get("/places")
def places(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    term: str = Query("doctor", min_length=1),
    radius: int = Query(5000, gt=0, le=50000),
    limit: int = Query(20, gt=0, le=100),
):
    return proxies.search_places(lat, lon, term=term, radius=radius, limit=limit)


@app.get("/health", response_model=HealthResponse)
def health(request: Request):
    return HealthResponse(
        status="ok",
        model=config.MODEL_NAME,
        llm_available=getattr(request.app.state, "llm_client", None) is not None,
    )
