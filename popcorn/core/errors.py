"""
Classification des erreurs de la source distante en messages utilisateur.

Taxonomie :
- Connectivite (aucun transport joignable) -> NO_CONNECTION_MESSAGE
- Erreur HTTP 404 -> NOT_FOUND_MESSAGE
- Erreur HTTP 500/502/503 -> SERVER_ERROR_MESSAGE
- Autre code HTTP -> "Unexpected error occurred (<code>)."
- Erreur non classee -> description de l'erreur ou UNKNOWN_ERROR_MESSAGE
"""

from popcorn.core.ports.api_clients import ConnectivityError, HttpStatusError

NO_CONNECTION_MESSAGE = "No internet connection. Please check your network."
NOT_FOUND_MESSAGE = "Resource not found."
SERVER_ERROR_MESSAGE = "Server error. Please try again later."
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"

SERVER_ERROR_CODES = frozenset({500, 502, 503})


def status_message(status_code: int) -> str:
    """Message utilisateur pour un code HTTP d'erreur."""
    if status_code == 404:
        return NOT_FOUND_MESSAGE
    if status_code in SERVER_ERROR_CODES:
        return SERVER_ERROR_MESSAGE
    return f"Unexpected error occurred ({status_code})."


def error_message(error: BaseException) -> str:
    """
    Convertit une erreur de la source distante en message utilisateur.

    Args:
        error: Exception capturee a la frontiere de la source distante

    Returns:
        Message a afficher dans l'evenement Error terminal
    """
    if isinstance(error, HttpStatusError):
        return status_message(error.status_code)
    # OSError couvre les erreurs de socket non converties par l'adaptateur
    if isinstance(error, (ConnectivityError, OSError)):
        return NO_CONNECTION_MESSAGE
    return str(error) or UNKNOWN_ERROR_MESSAGE
