from contextlib import contextmanager
from typing import Iterator
import logging

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Unidad de trabajo: todas las escrituras dentro del bloque se confirman
    juntas o se revierten juntas.

    Los repositorios usados dentro del bloque solo hacen flush(); el commit
    ocurre aquí al salir sin errores.
    """
    try:
        yield db
        db.commit()
    except Exception:
        logger.debug("Transacción revertida", exc_info=True)
        db.rollback()
        raise
