import logging
from typing import List

import boto3

from .errors import ServerError, classify_errors

logger = logging.getLogger(__name__)

STAFF_MEMBER_ATTRIBUTES = ["given_name", "family_name", "custom:payrollNumber"]


def create_cognito_client(region: str, access_key_id: str = None, secret_access_key: str = None):
    """Read-only Cognito client used to list the centre's staff."""
    return boto3.client(
        "cognito-idp",
        region_name=region,
        aws_access_key_id=access_key_id,
        aws_secret_access_key=secret_access_key
    )


class StaffMember:
    """Staff members as recorded in the identity provider's user pool."""

    def __init__(self, client, user_pool_id: str):
        self.client = client
        self.user_pool_id = user_pool_id

    def get_staff_members(self) -> List[dict]:
        """Payroll number, first name and last name of every user, sorted by payroll number."""
        with classify_errors("An unexpected error occurred"):
            paginator = self.client.get_paginator("list_users")
            users = []
            for page in paginator.paginate(UserPoolId=self.user_pool_id, AttributesToGet=STAFF_MEMBER_ATTRIBUTES):
                users.extend(page.get("Users", []))

            if not users:
                raise ServerError("There are no staff members stored in the system", 404)

            staff_members = []
            for user in users:
                attributes = {
                    attribute["Name"]: attribute["Value"]
                    for attribute in user.get("Attributes", [])
                    if attribute.get("Name") and attribute.get("Value")
                }
                payroll_number = attributes.get("custom:payrollNumber")
                if payroll_number is None:
                    logger.info(f"Skipping user {user.get('Username')} with no payroll number")
                    continue
                staff_members.append({
                    "first_name": attributes.get("given_name"),
                    "last_name": attributes.get("family_name"),
                    "payroll_number": int(payroll_number),
                })

            staff_members.sort(key=lambda staff_member: staff_member["payroll_number"])
            logger.info(f"Found {len(staff_members)} staff members")
            return staff_members
