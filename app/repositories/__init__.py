"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Async SQLAlchemy queries for users, refresh tokens,
posts with their media and card blocks, and invitations.
Each repository extends BaseRepository and is exposed as a module singleton.
"""
