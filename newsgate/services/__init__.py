# Services package.
#
# Gateway services (orchestration across collaborators):
#
#   aggregation_service  — fan-out article + comments view, listing proxy
#   comment_pipeline     — moderate-then-persist comment creation
#
# Collaborator services (single-owner data or logic):
#
#   comment_service      — comment table CRUD for the comment store
#   moderation_service   — banned-term matching for the moderator
#   news_service         — static article catalog for the news source
#
# Gateway service functions take a ``DownstreamClients`` bundle plus an
# explicit ``correlation_id`` and ``Deadline``; comment store functions
# take an AsyncSession so the router layer owns the transaction.
