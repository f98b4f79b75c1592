# Services package init
"""
WordTally Backend — Services Layer
===================================

Service Inventory:
    - IdentityVerifier (abstract) / JwtIdentityVerifier: bearer token issue + verify
    - AuthService: signup, login, email verification
    - PageFetcher (abstract) / HttpxPageFetcher: HTTP GET of submitted URLs
    - count_words: visible-word counter for HTML bodies
    - UrlService: add → list → favorite → delete pipeline and domain aggregates

Services receive the request's database session as an argument and keep no
per-request state, so one instance serves all concurrent requests.
"""
