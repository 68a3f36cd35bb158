"""Users app package.

Defines the marketplace account model (customer or venue owner) with email
login, the one-time code records behind registration, password reset and
email changes, and the JWT-based authentication endpoints. Use
``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout the
project.
"""
