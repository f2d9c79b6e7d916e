from app.clients.tournaments_client import TournamentsClient, TournamentsClientError

__all__ = ["TournamentsClient", "TournamentsClientError"]
