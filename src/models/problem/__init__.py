from src.models.problem.problem_details import BAD_REQUEST_TYPE, SERVER_ERROR_TYPE, ProblemDetails

__all__ = ["BAD_REQUEST_TYPE", "SERVER_ERROR_TYPE", "ProblemDetails"]
