from .play import PlayRound, build_play_round
