# Services package init
"""
DocRelay Backend — Services Layer
==================================

Service Inventory:
    - RecordService: insert-one and read-all against the records collection,
      translating driver errors into StorageOperationError
"""
