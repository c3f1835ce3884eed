import copy

# substitute data served when the upstream cannot be reached
MOCK_USERS = (
    {
        "id": 1,
        "email": "john@gmail.com",
        "username": "johndoe",
        "password": "m38rmF$",
        "name": {"firstname": "john", "lastname": "doe"},
        "address": {
            "city": "kilcoole",
            "street": "7835 new road",
            "number": 3,
            "zipcode": "12926-3874",
            "geolocation": {"lat": "-37.3159", "long": "81.1496"},
        },
        "phone": "1-570-236-7033",
    },
    {
        "id": 2,
        "email": "morrison@gmail.com",
        "username": "mor_2314",
        "password": "83r5^_",
        "name": {"firstname": "david", "lastname": "morrison"},
        "address": {
            "city": "Cullman",
            "street": "Lovers Ln",
            "number": 7267,
            "zipcode": "29576-7874",
            "geolocation": {"lat": "40.3467", "long": "-30.1310"},
        },
        "phone": "1-853-854-6666",
    },
)


def fallback_payload():
    """Fresh copy of the substitute users, safe to hand to a response."""
    return copy.deepcopy(list(MOCK_USERS))
