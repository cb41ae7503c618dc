TARGETS = ["termo", "sagaz", "negro", "mexer", "nobre", "fosse"]
ACCEPTED = ["casas", "salas", "audio"]
ACCENTED = {"audio": "áudio"}


def type_word(session, word):
    for letter in word:
        session.input_letter(letter)


def play(session, word):
    type_word(session, word)
    return session.submit_guess()
