"""
:py:mod:`jsonapi_client.serde` converts between JSON:API documents and their
intermediate representation (:py:mod:`jsonapi_client.serde.models`).
"""
