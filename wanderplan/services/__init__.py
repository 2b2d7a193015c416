from wanderplan.services.budget import aggregate_budget, summarize_budget
from wanderplan.services.cost_parser import parse_cost
from wanderplan.services.grounding import collect_source_urls, source_urls_from_metadata
from wanderplan.services.itinerary import generate_itinerary
from wanderplan.services.itinerary_validator import validate_itinerary
from wanderplan.services.prompt_builder import build_prompt
from wanderplan.services.response_extractor import extract_json_payload

__all__ = [
    "aggregate_budget",
    "build_prompt",
    "collect_source_urls",
    "extract_json_payload",
    "generate_itinerary",
    "parse_cost",
    "source_urls_from_metadata",
    "summarize_budget",
    "validate_itinerary",
]
