"""
Load the sample user-registration schema and a few submissions.

    python -m formsapi.seed
"""
import asyncio
import logging

from formsapi import intake, store
from formsapi.database import database
from formsapi.errors import DuplicateSubmission
from formsapi.logging_conf import configure_logging
from formsapi.models.form import FormSchema

logger = logging.getLogger(__name__)

SAMPLE_SCHEMA = {
    "name": "user-registration",
    "description": "User registration form with personal information",
    "fields": [
        {
            "name": "firstName",
            "type": "text",
            "label": "First Name",
            "required": True,
            "minLength": 2,
            "maxLength": 50,
            "placeholder": "Enter your first name",
        },
        {
            "name": "lastName",
            "type": "text",
            "label": "Last Name",
            "required": True,
            "minLength": 2,
            "maxLength": 50,
            "placeholder": "Enter your last name",
        },
        {
            "name": "email",
            "type": "email",
            "label": "Email Address",
            "required": True,
            "placeholder": "Enter your email address",
        },
        {
            "name": "age",
            "type": "number",
            "label": "Age",
            "required": True,
            "min": 13,
            "max": 120,
            "placeholder": "Enter your age",
        },
        {
            "name": "gender",
            "type": "dropdown",
            "label": "Gender",
            "required": True,
            "options": ["Male", "Female", "Other", "Prefer not to say"],
        },
        {"name": "birthDate", "type": "date", "label": "Date of Birth", "required": True},
        {
            "name": "phoneNumber",
            "type": "text",
            "label": "Phone Number",
            "required": False,
            "placeholder": "Enter your phone number",
            "validation": {
                "pattern": "^[+]?[1-9]?[0-9]{7,15}$",
                "message": "Please enter a valid phone number",
            },
        },
        {
            "name": "bio",
            "type": "text",
            "label": "Bio",
            "required": False,
            "maxLength": 500,
            "placeholder": "Tell us about yourself...",
        },
    ],
}

SAMPLE_SUBMISSIONS = [
    {
        "firstName": "John",
        "lastName": "Doe",
        "email": "john.doe@example.com",
        "age": 28,
        "gender": "Male",
        "birthDate": "1995-05-15",
        "phoneNumber": "+1234567890",
        "bio": "Software developer passionate about technology",
    },
    {
        "firstName": "Jane",
        "lastName": "Smith",
        "email": "jane.smith@example.com",
        "age": 32,
        "gender": "Female",
        "birthDate": "1991-08-22",
        "bio": "Product manager with 8 years of experience",
    },
    {
        "firstName": "Alex",
        "lastName": "Johnson",
        "email": "alex.johnson@example.com",
        "age": 25,
        "gender": "Other",
        "birthDate": "1998-12-03",
        "phoneNumber": "+1987654321",
    },
]


async def seed() -> int:
    await store.upsert_schema(FormSchema.model_validate(SAMPLE_SCHEMA))
    logger.info(f"Schema '{SAMPLE_SCHEMA['name']}' saved")

    created = 0
    for data in SAMPLE_SUBMISSIONS:
        try:
            await intake.submit(data)
            created += 1
        except DuplicateSubmission:
            logger.info(f"Sample submission for {data['email']} already present, skipping")
    logger.info(f"Seeded {created} submissions")
    return created


async def main():
    configure_logging()
    await database.connect()
    try:
        await seed()
    finally:
        await database.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
