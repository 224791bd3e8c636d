HTTP_STATUS_CODES = {
    "OK": 200,
    "CREATED": 201,
    "NO_CONTENT": 204,
    "BAD_REQUEST": 400,
    "UNAUTHORIZED": 401,
    "FORBIDDEN": 403,
    "NOT_FOUND": 404,
    "CONFLICT": 409,
    "VALIDATION_ERROR": 422,
    "TOO_MANY_REQUESTS": 429,
    "INTERNAL_SERVER_ERROR": 500,
    "SERVICE_UNAVAILABLE": 503,
}

ERROR_MESSAGES = {
    "VALIDATION_FAILED": "Validation failed. Please check your inputs.",
    "UNAUTHORIZED_ACCESS": "You are not authorized to access this resource.",
    "SERVER_ERROR": "An unexpected error occurred. Please try again later.",
    "NO_FILE": "No file uploaded",
    "EMPTY_FILE": "CSV file is empty or has no valid data",
    "NO_VALID_CAMPAIGNS": "No valid campaigns found in CSV",
    "NO_CAMPAIGN_NAME_COLUMN": "Could not find campaign name column in CSV",
    "INVALID_TOKEN_FORMAT": "Invalid access token format",
}

AUTHENTICATION_MESSAGES = {
    "AUTHENTICATION_REQUIRED": "Authentication Required",
    "TOKEN_EXPIRED": "Token expired",
    "INVALID_TOKEN": "Invalid token",
}

