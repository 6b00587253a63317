import bcrypt


class HashService:
    """
    Serviço de hash de senhas usando bcrypt.
    """

    @staticmethod
    def hash_password(password: str) -> str:
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    @staticmethod
    def verify(password: str, hashed: str | None) -> bool:
        """
        Verifica se a senha corresponde ao hash armazenado.
        """
        if not hashed:
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            return False
