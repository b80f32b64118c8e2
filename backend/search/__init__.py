"""
Job search aggregation.

Combines the internal job store and the external job source into one answer:
- criteria: fill unsupplied filters from the subscriber's stored preferences
- paginator: page through the internal store until an empty page
- external_fetcher: one external request per title x country
- coordinator: run both concurrently and apply the merge/downgrade policy
- service: request-scoped facade used by the API layer
"""
