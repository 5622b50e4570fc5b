"""Authentication.

Users log in with email/password and receive a short-lived signed JWT.
Every protected request presents it as `Authorization: Bearer <token>`
and resolves to a CurrentIdentity. Tokens are stateless: logout is a
client-side discard.
"""
