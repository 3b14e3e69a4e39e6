from modules.accounts.hashing import PasswordHasher


class TestPasswordHasher:
    def setup_method(self):
        self.hasher = PasswordHasher(rounds=4)

    def test_hash_is_not_plaintext(self):
        hashed = self.hasher.hash("Passw0rd!")
        assert "Passw0rd!" not in hashed
        assert hashed.startswith("$2")

    def test_verify_correct_password(self):
        hashed = self.hasher.hash("Passw0rd!")
        assert self.hasher.verify("Passw0rd!", hashed) is True

    def test_verify_wrong_password(self):
        hashed = self.hasher.hash("Passw0rd!")
        assert self.hasher.verify("passw0rd!", hashed) is False

    def test_salt_differs_per_call(self):
        assert self.hasher.hash("Passw0rd!") != self.hasher.hash("Passw0rd!")

    def test_long_multibyte_passwords_are_distinguished(self):
        """Inputs past bcrypt's 72-byte window still compare on every byte."""
        base = "ö" * 40
        hashed = self.hasher.hash(base + "A")
        assert self.hasher.verify(base + "A", hashed) is True
        assert self.hasher.verify(base + "B", hashed) is False

    def test_verify_malformed_hash(self):
        assert self.hasher.verify("Passw0rd!", "not-a-bcrypt-hash") is False
