from wanderplan.routes.itinerary import router as itinerary_router

__all__ = ["itinerary_router"]
