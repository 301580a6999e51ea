"""Domain layer - Pure business logic.

This layer contains the organisation aggregate, its membership entities,
domain events, errors and protocols (ports). The domain layer has NO
dependencies on any framework or infrastructure - it is pure Python and
never awaits.

Structure:
- entities/: Organisation aggregate root and Membership child entity
- enums/: Closed value sets (organisation roles)
- errors/: Business rule violations returned in Result types
- events/: Domain events (things that happened to an organisation)
- protocols/: Ports implemented by infrastructure (repositories, bus, UoW)
"""
