"""Report aggregation engine.

accumulator -> normalizer -> aggregator -> bands -> percentages, assembled by
``service.ReportService``. Everything here is pure apart from the repository
calls made by the services.
"""
