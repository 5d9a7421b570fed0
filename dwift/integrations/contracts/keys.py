"""Endpoint paths and JSON field names used by the Dwolla v1 REST API."""


class Paths:
    HOST = "https://uat.dwolla.com/oauth/rest"
    TRANSACTIONS = "/transactions"
    SEND = TRANSACTIONS + "/send"
    BALANCE = "/balance"


class ErrorMessages:
    INVALID_ACCESS_TOKEN = "Invalid access token"
    INSUFFICIENT_BALANCE = "Insufficient balance"
    INVALID_ACCOUNT_PIN = "Invalid account PIN"


class RequestKeys:
    DESTINATION_ID = "destinationId"
    PIN = "pin"
    AMOUNT = "amount"
    DESTINATION_TYPE = "destinationType"
    FUNDS_SOURCE = "fundsSource"
    NOTES = "notes"
    ASSUME_COSTS = "assumeCosts"
    ADDITIONAL_FEES = "additionalFees"
    METADATA = "metadata"
    ASSUME_ADDITIONAL_FEES = "assumeAdditionalFees"
    FACILITATOR_AMOUNT = "facilitatorAmount"

    # transaction listing query
    TYPES = "types"
    LIMIT = "limit"
    SKIP = "skip"


class ResponseKeys:
    SUCCESS = "Success"
    MESSAGE = "Message"
    RESPONSE = "Response"
