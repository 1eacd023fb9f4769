from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
    # Table names are the lower-cased class names: "account", "childmember", ...
    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower()
