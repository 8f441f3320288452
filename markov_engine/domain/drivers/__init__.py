# Domain drivers: concrete DomainOperations plus the fill and walk loops that use them.
