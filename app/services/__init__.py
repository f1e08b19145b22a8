"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business rules for the content dashboard.
Post and media services build on ``content_service`` (pure HTML processing)
and ``storage_service`` (S3 or local disk); routers commit after a service
call returns.
"""
