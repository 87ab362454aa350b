# run_matching.py

import argparse

import pandas as pd

from mentor_match.config import DAY_NAMES, DB_PATH, DEFAULT_SEED
from mentor_match.data_generation.toy_dataset import seed_store
from mentor_match.invitations import session_summary
from mentor_match.models import UserNotFoundError
from mentor_match.reporting.metrics import platform_metrics, registrations_by_week
from mentor_match.scheduling.session_plan import collect_mentee_candidates, plan_sessions
from mentor_match.service import find_matches_for_user
from mentor_match.storage.sqlite_store import SQLiteStore
from mentor_match.weeks import current_week_key


def matches_frame(matches) -> pd.DataFrame:
    rows = []
    for m in matches:
        rows.append({
            "partner": m.partner_email,
            "week": m.week_key,
            "day": DAY_NAMES[m.day_of_week],
            "start": m.start_time,
            "end": m.end_time,
            "minutes": m.duration,
            "abilities": ", ".join(m.abilities),
        })
    return pd.DataFrame(rows, columns=["partner", "week", "day", "start", "end", "minutes", "abilities"])


def parse_args():
    parser = argparse.ArgumentParser(description="Mentor/mentee availability matching demo")
    parser.add_argument("--db", default=DB_PATH, help="SQLite file (use :memory: for a throwaway run)")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED)
    parser.add_argument("--mentors", type=int, default=6)
    parser.add_argument("--mentees", type=int, default=8)
    parser.add_argument("--no-seed-data", action="store_true", help="Use the users already in --db")
    parser.add_argument("--user", help="Email to find matches for (default: every user)")
    parser.add_argument("--plan", action="store_true", help="Also solve the one-session-per-mentee plan")
    return parser.parse_args()


def main():
    args = parse_args()
    pd.set_option("display.width", 160)

    with SQLiteStore(args.db) as store:
        store.init_schema()

        if not args.no_seed_data:
            ids = seed_store(store, num_mentors=args.mentors, num_mentees=args.mentees, seed=args.seed)
            print(f"[MATCHING] Registered {len(ids)} toy users (seed={args.seed}).")

        week_key = current_week_key()
        removed = store.clean_old_data(week_key)
        print(f"[MATCHING] Cleaned data older than week {week_key}: {removed}")

        if args.user:
            user = store.get_user_by_email(args.user)
            if user is None:
                raise SystemExit(f"[MATCHING] {UserNotFoundError(args.user)}")
            users = [user]
        else:
            users = [
                store.get_user(r["id"])
                for r in store.query("SELECT id FROM users ORDER BY user_type, email")
            ]

        for user in users:
            matches = find_matches_for_user(store, user.id)
            print(f"\n=== {user.email} ({user.user_type}) : {len(matches)} match(es) ===")
            if matches:
                print(matches_frame(matches).to_string(index=False))
                first = session_summary(matches[0], user.email, user.user_type)
                print(f"  first pick: {first['day_of_week']} {first['scheduled_date']}, {first['scheduled_time']}")

        if args.plan:
            print("\n[PLAN] Solving one session per mentee...")
            status, plan = plan_sessions(collect_mentee_candidates(store))
            print(f"[PLAN] Solver status: {status}, sessions planned: {len(plan)}")
            rows = []
            for mentee_id, cand in sorted(plan.items()):
                mentee = store.get_user(mentee_id)
                rows.append({
                    "mentee": mentee.email,
                    "mentor": cand.partner_email,
                    "week": cand.week_key,
                    "day": DAY_NAMES[cand.day_of_week],
                    "time": f"{cand.start_time}-{cand.end_time}",
                })
            if rows:
                print(pd.DataFrame(rows).to_string(index=False))

        print("\n=== METRICS ===")
        metrics = platform_metrics(store, week_key)
        print(f"Users   : {metrics['users']}")
        print(f"Sessions: {metrics['sessions']}")
        print(registrations_by_week(store).to_string(index=False))


if __name__ == "__main__":
    main()
