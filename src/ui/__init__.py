"""NiceGUI interface - thin presentation layer over the vector store client.

Responsibilities:
    - Settings form persisted in browser storage
    - File list with upload, replace and delete
    - Chat drawer threading history into each question

Contains no remote logic. Every operation goes through VectorStoreClient
and renders its result.
"""
