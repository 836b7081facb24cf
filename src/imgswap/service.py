import os

from fastapi import FastAPI

from .classifier import ImageReplacer
from .config import load_config
from .decisions import classify, collect_urls
from .gate import should_replace
from .log import get_logger
from .models import ClassifyRequest, ClassifyResponse, SourcesResponse

logger = get_logger(__name__)

settings = load_config(os.getenv("IMGSWAP_CONFIG"))
replacer = ImageReplacer.from_settings(settings)

app = FastAPI()


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/v1/sources", response_model=SourcesResponse)
def sources() -> SourcesResponse:
    registry = replacer.sources
    return SourcesResponse(
        possible_sources=sorted(registry.possible_sources),
        allowed_sources=sorted(registry.allowed_sources),
        is_foreign_allowed=registry.is_foreign_allowed,
        site_mappings=registry.site_mappings,
    )


@app.post("/v1/classify", response_model=ClassifyResponse)
def classify_urls(payload: ClassifyRequest) -> ClassifyResponse:
    replaced = should_replace(payload.context) if payload.context else True
    urls = collect_urls(payload)
    if not replaced:
        logger.info("Replacement disabled for request; %d urls left untouched", len(urls))
    return classify(replacer, urls, replaced=replaced)
