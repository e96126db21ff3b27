from uuid import uuid4

from sqlalchemy.exc import IntegrityError

from core.errors import (
    INTERNAL_ERROR_MESSAGE,
    DatabaseError,
    FieldError,
    NotFoundError,
    ValidationError,
    error_response,
)


def test_validation_error_maps_to_400_with_fields():
    error = ValidationError("Validation error in task data", fields=[FieldError("titulo", "too short")])

    assert error_response(error) == (
        400,
        {"message": "Validation error in task data", "details": [{"field": "titulo", "message": "too short"}]},
    )


def test_not_found_error_names_the_entity():
    task_id = str(uuid4())
    status, body = error_response(NotFoundError("Task", task_id))

    assert status == 404
    assert body["message"] == f"Task with ID '{task_id}' not found"


def test_database_error_keeps_cause_as_details():
    cause = RuntimeError("connection reset")
    error = DatabaseError("Error deleting task", cause=cause)

    assert error.cause is cause
    assert error_response(error) == (500, {"message": "Error deleting task", "details": "connection reset"})


def test_unknown_errors_become_generic_500():
    assert error_response(KeyError("x")) == (500, {"message": INTERNAL_ERROR_MESSAGE})


def test_database_error_details_omit_statement_and_parameters():
    cause = IntegrityError(
        "INSERT INTO users (email, password) VALUES (?, ?)",
        ("maria@example.com", "$pbkdf2-sha256$29000$salt$hash"),
        Exception("UNIQUE constraint failed: users.email"),
    )

    status, body = error_response(DatabaseError("Error creating user", cause=cause))

    assert status == 500
    assert body["details"] == "UNIQUE constraint failed: users.email"
    assert "pbkdf2" not in str(body)
    assert "INSERT" not in str(body)
