"""Environment-driven settings for the AI backend.

Values are read once at import time from the process environment, after
loading the nearest ``.env`` file.
"""
import os

from dotenv import find_dotenv, load_dotenv

dotenv_path = find_dotenv(usecwd=True)
if dotenv_path:
    load_dotenv(dotenv_path)

# LLM
HF_TOKEN = os.getenv("HF_TOKEN")
MODEL_NAME = os.getenv("MODEL_NAME", "meta-llama/Llama-3.1-70B-Instruct")
LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "1024"))
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.3"))

# ML classifier ensemble
CLASSIFIER_URL = os.getenv(
    "CLASSIFIER_URL", "https://software-enginnering-mediassist-ml.onrender.com/predict"
)
CLASSIFIER_TIMEOUT = float(os.getenv("CLASSIFIER_TIMEOUT", "60"))

# Third-party proxies
SPOONACULAR_API_KEY = os.getenv("SPOONACULAR_API_KEY")
SPOONACULAR_API_URL = os.getenv("SPOONACULAR_API_URL", "https://api.spoonacular.com/recipes")
TOMTOM_API_KEY = os.getenv("TOMTOM_API_KEY")
TOMTOM_API_URL = os.getenv("TOMTOM_API_URL", "https://api.tomtom.com/search/2/poiSearch")
PROXY_TIMEOUT = float(os.getenv("PROXY_TIMEOUT", "15"))

# Service
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:8001")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Must match the frontend MAX_SYMPTOMS setting
MAX_SYMPTOMS = int(os.getenv("MAX_SYMPTOMS", "5"))
